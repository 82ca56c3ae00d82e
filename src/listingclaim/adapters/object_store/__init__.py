"""Public interface for the object store adapter."""

from __future__ import annotations

from .client import HttpObjectStore
from .schema import UploadResponse

__all__ = ["HttpObjectStore", "UploadResponse"]

"""Claim provisioning saga and its steps."""

from __future__ import annotations

from .assets import AssetIngestor, AssetPolicy, storage_path
from .identity import CLAIMANT_ROLE, IdentityProvisioner
from .lock import ClaimLockManager
from .notifications import dispatch_notifications
from .orchestrator import ClaimOutcome, ClaimSaga
from .records import ClaimRecordWriter
from .saga import Compensation, CompensationStack
from .submission import AssetUpload, ClaimSubmission, build_overrides, normalize_email
from .verification import VerificationGate

__all__ = [
    "CLAIMANT_ROLE",
    "AssetIngestor",
    "AssetPolicy",
    "AssetUpload",
    "ClaimLockManager",
    "ClaimOutcome",
    "ClaimRecordWriter",
    "ClaimSaga",
    "ClaimSubmission",
    "Compensation",
    "CompensationStack",
    "IdentityProvisioner",
    "VerificationGate",
    "build_overrides",
    "dispatch_notifications",
    "normalize_email",
    "storage_path",
]

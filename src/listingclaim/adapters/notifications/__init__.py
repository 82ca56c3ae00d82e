"""Public interface for the notification adapters."""

from __future__ import annotations

from .channels import EmailNotifier, OperatorWebhookNotifier, build_notifiers

__all__ = ["EmailNotifier", "OperatorWebhookNotifier", "build_notifiers"]

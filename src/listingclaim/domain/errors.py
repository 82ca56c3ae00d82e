"""Error taxonomy for the claim flow.

Every ``ClaimError`` carries the HTTP status it maps to and a generic message that
is safe to show the caller. Diagnostics belong in the server log, never in
``public_message``.
"""

from __future__ import annotations

from typing import ClassVar


class ClaimError(RuntimeError):
    """Base class for failures surfaced to the claimant."""

    status_code: ClassVar[int] = 500
    default_message: ClassVar[str] = "An unexpected error occurred"

    def __init__(self, detail: str | None = None, *, public_message: str | None = None) -> None:
        super().__init__(detail or self.default_message)
        self.public_message = public_message or self.default_message


class ValidationError(ClaimError):
    status_code = 400
    default_message = "Some required fields are missing or invalid"


class VerificationError(ClaimError):
    status_code = 400
    default_message = "Invalid or expired verification code"


class IsolationViolation(ClaimError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(ClaimError):
    status_code = 404
    default_message = "Business not found"


class ClaimConflict(ClaimError):
    status_code = 409
    default_message = "This business is no longer available for claiming"


class DuplicateAccount(ClaimError):
    status_code = 400
    default_message = "An account with this email already exists. Please log in instead."


class ProvisioningFailed(ClaimError):
    default_message = "Failed to create account. Please try again."


class UploadError(ClaimError):
    default_message = "Failed to upload images. Please try again."


class PersistenceError(ClaimError):
    default_message = "Failed to submit claim. Please try again."


class DeadlineExceeded(ClaimError):
    default_message = "The claim took too long to process. Please try again."


class NotificationError(RuntimeError):
    """Raised by notification steps; logged and never surfaced to the claimant."""

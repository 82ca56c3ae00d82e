"""Message bodies for claim notifications."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from listingclaim.domain.model import ClaimSubmitted


def claimant_subject(event: ClaimSubmitted) -> str:
    return f"Claim submitted for {event.listing_name}"


def claimant_text(event: ClaimSubmitted) -> str:
    return (
        f"Hi {event.first_name},\n\n"
        f"Thank you for claiming {event.listing_name}. "
        "Our team will review your claim within 24-48 hours and email you once it is approved. "
        "After approval you can log in to manage your listing.\n"
    )


def claimant_html(event: ClaimSubmitted) -> str:
    name = escape(event.listing_name)
    return (
        "<!DOCTYPE html><html><body>"
        f"<p>Hi {escape(event.first_name)},</p>"
        f"<p>Thank you for claiming <strong>{name}</strong>.</p>"
        f"<p>Confirmation sent to: {escape(event.claimant_email)}</p>"
        "<ol>"
        "<li><strong>Review (24-48 hours)</strong>: we verify your ownership and details.</li>"
        "<li><strong>Approval</strong>: you will receive an email when your claim is approved.</li>"
        "<li><strong>Dashboard access</strong>: log in to manage your listing.</li>"
        "</ol>"
        "</body></html>"
    )


def operator_text(event: ClaimSubmitted, *, review_url: str | None = None) -> str:
    lines = [
        f"New claim request: {event.listing_name} ({event.tenant})",
        f"{event.claimant_name} has claimed {event.listing_name}.",
        f"- Email: {event.claimant_email}",
        f"- Website: {event.business_website or 'Not provided'}",
        "- Verification: email",
        f"- Details edited: {'yes' if event.was_edited else 'no'}",
    ]
    if review_url:
        lines.append(f"Review claim: {review_url}")
    return "\n".join(lines)

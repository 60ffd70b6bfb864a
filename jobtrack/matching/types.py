"""Types shared by the status/company matching engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StatusKind(str, Enum):
    """Application outcomes the email classifier can recognise.

    Values are the exact option names of the Notion ``Status`` select, so a
    kind can be written back without a separate mapping step.
    """

    INTERVIEW = "Interview"
    REJECTED = "Rejected"
    OFFER = "Offer"
    ASSESSMENT = "Assessment"

    @classmethod
    def parse(cls, label: object) -> StatusKind | None:
        """Map a free-text label to a kind, case-insensitively. Unknown → None."""
        if not isinstance(label, str):
            return None
        wanted = label.strip().lower()
        for kind in cls:
            if kind.value.lower() == wanted:
                return kind
        return None


# ── Email side ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EmailMessage:
    """An inbound notification as handed over by the email classifier."""

    id: str
    thread_id: str
    subject: str
    sender: str
    date: str
    snippet: str
    body: str | None = None


@dataclass(frozen=True)
class ParsedEmail:
    """Status and company derived from a single EmailMessage."""

    email: EmailMessage
    status: StatusKind | None
    company: str | None
    confidence: float  # 0.0 (no match) → 0.9 (keyword in subject)


@dataclass(frozen=True)
class EmailStatusUpdate:
    """A ``{company, status}`` pair produced from classifier output."""

    company: str
    status: StatusKind


# ── System-of-record side ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class JobApplication:
    """Snapshot of one tracked application read from the Notion database."""

    id: str
    company: str
    role: str
    status: str          # Applied | Interview | Offer | Rejected | Assessment
    date_applied: str    # ISO date as stored in Notion, "" when unset


@dataclass(frozen=True)
class PendingUpdate:
    """A proposed, unconfirmed binding of an update to exactly one application."""

    update: EmailStatusUpdate
    application_id: str
    application_company: str
    application_role: str

    @property
    def new_status(self) -> StatusKind:
        return self.update.status

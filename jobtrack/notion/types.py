"""Notion property names and the record written by `jobtrack log`."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

# ── Database schema (property names the tracker depends on) ────────────────────

PROP_COMPANY = "Company"            # title
PROP_ROLE = "Role"                  # rich_text
PROP_DATE_APPLIED = "Date Applied"  # date
PROP_DAY = "Day"                    # rich_text, weekday name
PROP_STATUS = "Status"              # select
PROP_LOCATION = "Location"          # rich_text
PROP_SOURCE = "Source"              # rich_text, optionally linked to the posting
PROP_RESUME = "Resume"              # rich_text, resume file name

INITIAL_STATUS = "Applied"

#: Statuses that still count as open and can be moved forward by `jobtrack sync`.
OPEN_STATUSES: tuple[str, ...] = ("Applied", "Interview", "Offer")


def _rich_text(content: str, link: str | None = None) -> dict[str, Any]:
    text: dict[str, Any] = {"content": content}
    if link:
        text["link"] = {"url": link}
    return {"rich_text": [{"text": text}]}


@dataclass(frozen=True)
class NewApplication:
    """Everything the intake form collects for a single Notion page."""

    company: str
    role: str
    location: str = ""
    timezone: str = ""
    source: str = ""
    url: str = ""
    resume: str = ""  # file name inside the resume folder, "" for none

    @property
    def location_text(self) -> str:
        """Location with the timezone appended in parentheses when known."""
        if self.timezone:
            return f"{self.location} ({self.timezone})"
        return self.location

    def to_properties(self, now: datetime) -> dict[str, Any]:
        """Build the Notion ``properties`` payload for ``pages.create``."""
        properties: dict[str, Any] = {
            PROP_COMPANY: {"title": [{"text": {"content": self.company}}]},
            PROP_ROLE: _rich_text(self.role),
            PROP_DATE_APPLIED: {"date": {"start": now.isoformat()}},
            PROP_DAY: _rich_text(now.strftime("%A")),
            PROP_STATUS: {"select": {"name": INITIAL_STATUS}},
            PROP_LOCATION: _rich_text(self.location_text),
            PROP_SOURCE: _rich_text(self.source, link=self.url or None),
        }
        # File URLs are rejected by Notion, so only the name is stored.
        if self.resume:
            properties[PROP_RESUME] = _rich_text(self.resume)
        return properties

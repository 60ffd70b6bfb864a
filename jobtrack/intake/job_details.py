"""Parse the "Parse Job" shortcut's clipboard answer into job fields.

The shortcut asks an AI model to summarise the open posting and copies
back a block such as::

    Role: Backend Engineer
    Company: Initech
    Location: Austin, TX
    Timezone: CST
    Job Posting URL: https://...

Fields may also arrive run together on one line. Anything missing comes
back as an empty string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_ROLE = "Unknown Role"

_FLAGS = re.IGNORECASE | re.DOTALL
_ROLE = re.compile(r"Role:\s*(.+?)(?=\s*\n?\s*Company:|$)", _FLAGS)
_COMPANY = re.compile(r"Company:\s*(.+?)(?=\s*\n?\s*Location:|$)", _FLAGS)
_LOCATION = re.compile(
    r"Location:\s*(.+?)(?=\s*\n?\s*Timezone:|\s*\n?\s*Job Posting URL:|$)", _FLAGS
)
_TIMEZONE = re.compile(r"Timezone:\s*(.+?)(?=\s*\n?\s*Job Posting URL:|$)", _FLAGS)


@dataclass(frozen=True)
class JobDetails:
    role: str = ""
    company: str = ""
    location: str = ""
    timezone: str = ""

    def with_fallbacks(self) -> JobDetails:
        """Placeholder company/role so the form never opens with blank titles."""
        return replace(
            self,
            company=self.company or UNKNOWN_COMPANY,
            role=self.role or UNKNOWN_ROLE,
        )


def _field(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def parse_job_details(text: str) -> JobDetails:
    return JobDetails(
        role=_field(_ROLE, text),
        company=_field(_COMPANY, text),
        location=_field(_LOCATION, text),
        timezone=_field(_TIMEZONE, text),
    )

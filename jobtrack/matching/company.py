"""Best-effort company name extraction from an email's sender and subject."""

from __future__ import annotations

import re

# "Talent Team <talent@acme.com>" → display name before the angle bracket
_DISPLAY_NAME = re.compile(r"^(.+?)\s*<")
_ROLE_PREFIX = re.compile(r"^(Recruiting|Talent|HR|Careers|Jobs)\s*(at|@|-|from)?\s*", re.IGNORECASE)
_ROLE_SUFFIX = re.compile(r"\s*(Recruiting|Talent Acquisition|HR|Careers|Jobs)$", re.IGNORECASE)

# First label after "@": jobs@acme.co.uk → "acme"
_DOMAIN_LABEL = re.compile(r"@([a-zA-Z0-9-]+)\.")

_SUBJECT_COMPANY = re.compile(
    r"(?:at|from|with)\s+([A-Z][a-zA-Z0-9\s&]+?)(?:\s*[-–—]|\s+for|\s+regarding|$)",
    re.IGNORECASE,
)

#: Mail providers and applicant-tracking systems that never name the employer.
GENERIC_DOMAINS: frozenset[str] = frozenset(
    {"gmail", "yahoo", "outlook", "hotmail", "greenhouse", "lever", "workday"}
)


def extract_company_name(sender: str, subject: str) -> str | None:
    """Guess the employer behind an email, or None.

    Tries the sender display name (minus recruiting prefixes/suffixes), then
    the sender's domain, then an "at/from/with <Company>" phrase in the
    subject. Deterministic, but only a heuristic.
    """
    return (
        _from_display_name(sender)
        or _from_domain(sender)
        or _from_subject(subject)
    )


def _from_display_name(sender: str) -> str | None:
    match = _DISPLAY_NAME.match(sender)
    if not match:
        return None
    name = match.group(1).strip()
    name = _ROLE_PREFIX.sub("", name, count=1)
    name = _ROLE_SUFFIX.sub("", name, count=1).strip()
    return name if len(name) > 1 else None


def _from_domain(sender: str) -> str | None:
    match = _DOMAIN_LABEL.search(sender)
    if not match:
        return None
    domain = match.group(1)
    if domain.lower() in GENERIC_DOMAINS:
        return None
    return domain[0].upper() + domain[1:]


def _from_subject(subject: str) -> str | None:
    match = _SUBJECT_COMPANY.search(subject)
    if not match:
        return None
    return match.group(1).strip() or None

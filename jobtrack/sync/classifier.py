"""Parse the "Check Job Emails" shortcut's clipboard answer into status updates.

The shortcut normally answers with a JSON array of ``{company, status}``
objects. Older versions copied raw email summaries (``subject``/``from``/
``snippet``) or one ``company: X, status: Y`` line per email; all three
shapes are accepted.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from jobtrack.matching.email_parser import email_to_update, parse_email
from jobtrack.matching.types import EmailMessage, EmailStatusUpdate, StatusKind

logger = logging.getLogger(__name__)

_LINE_COMPANY = re.compile(r"company[:\s]+([^,]+)", re.IGNORECASE)
_LINE_STATUS = re.compile(r"status[:\s]+(Interview|Rejected|Offer|Assessment)", re.IGNORECASE)

_EMAIL_KEYS = ("subject", "from", "snippet")


def parse_classifier_output(text: str) -> list[EmailStatusUpdate]:
    """Return every well-formed update in ``text``. Never raises."""
    if not text or not text.strip():
        return []

    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return _parse_lines(text)
    except (ValueError, RecursionError) as exc:
        # Oversized integers and pathologically nested arrays.
        logger.warning("Classifier output could not be decoded: %s", exc)
        return _parse_lines(text)

    if not isinstance(payload, list):
        logger.warning("Classifier returned JSON that is not a list; ignoring it")
        return []

    updates: list[EmailStatusUpdate] = []
    for item in payload:
        update = _parse_item(item)
        if update is not None:
            updates.append(update)
    logger.info("Classifier returned %d item(s), %d usable", len(payload), len(updates))
    return updates


def _parse_item(item: Any) -> EmailStatusUpdate | None:
    if not isinstance(item, dict):
        return None

    if "company" in item or "status" in item:
        company = item.get("company")
        status = StatusKind.parse(item.get("status"))
        if not isinstance(company, str) or not company.strip() or status is None:
            return None
        return EmailStatusUpdate(company=company.strip(), status=status)

    if any(key in item for key in _EMAIL_KEYS):
        email = EmailMessage(
            id=str(item.get("id", "")),
            thread_id=str(item.get("threadId", item.get("thread_id", ""))),
            subject=str(item.get("subject") or ""),
            sender=str(item.get("from") or ""),
            date=str(item.get("date") or ""),
            snippet=str(item.get("snippet") or ""),
            body=item.get("body") if isinstance(item.get("body"), str) else None,
        )
        return email_to_update(parse_email(email))

    return None


def _parse_lines(text: str) -> list[EmailStatusUpdate]:
    updates: list[EmailStatusUpdate] = []
    for line in text.splitlines():
        company_match = _LINE_COMPANY.search(line)
        status_match = _LINE_STATUS.search(line)
        if not company_match or not status_match:
            continue
        company = company_match.group(1).strip()
        status = StatusKind.parse(status_match.group(1))
        if company and status is not None:
            updates.append(EmailStatusUpdate(company=company, status=status))
    return updates

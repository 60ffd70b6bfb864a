"""Notion job-applications database — typed reads and writes over notion-client."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx
from notion_client import Client
from notion_client.errors import APIResponseError, HTTPResponseError, RequestTimeoutError

from jobtrack.matching.types import JobApplication
from jobtrack.notion.types import (
    OPEN_STATUSES,
    PROP_COMPANY,
    PROP_DATE_APPLIED,
    PROP_ROLE,
    PROP_STATUS,
    NewApplication,
)

logger = logging.getLogger(__name__)

_PAGE_SIZE = 100

# notion-client only wraps HTTP status errors and timeouts; connection failures
# surface as raw httpx errors.
_NOTION_ERRORS = (APIResponseError, HTTPResponseError, RequestTimeoutError, httpx.HTTPError)


class NotionError(Exception):
    """Raised when a Notion API call is rejected or fails in transit."""


def database_url(database_id: str) -> str:
    """Deep link that opens the database in the Notion desktop app."""
    return f"notion://notion.so/{database_id}"


class ApplicationsDatabase:
    """Wraps the job-applications database behind a small typed API.

    Every page leaving this class has been mapped through
    ``parse_application`` so callers never see Notion's property bags.

    Usage::

        db = ApplicationsDatabase(Client(auth=token), database_id)
        apps = db.query_open_applications()
        db.update_status(apps[0].id, "Interview")
    """

    def __init__(self, client: Client, database_id: str) -> None:
        self._client = client
        self._database_id = database_id

    @classmethod
    def from_token(cls, token: str, database_id: str) -> ApplicationsDatabase:
        return cls(Client(auth=token), database_id)

    # ── Read API ───────────────────────────────────────────────────────────────

    def query_open_applications(self) -> list[JobApplication]:
        """Return every application whose status is still open, across all pages."""
        status_filter = {
            "or": [
                {"property": PROP_STATUS, "select": {"equals": status}}
                for status in OPEN_STATUSES
            ]
        }
        applications: list[JobApplication] = []
        cursor: str | None = None

        while True:
            kwargs: dict[str, Any] = {
                "database_id": self._database_id,
                "filter": status_filter,
                "page_size": _PAGE_SIZE,
            }
            if cursor:
                kwargs["start_cursor"] = cursor
            response = self._call("databases.query", self._client.databases.query, **kwargs)

            for page in response.get("results", []):
                application = parse_application(page)
                if application is not None:
                    applications.append(application)

            cursor = response.get("next_cursor")
            if not response.get("has_more") or not cursor:
                break

        logger.info("Fetched %d open application(s) from Notion", len(applications))
        return applications

    # ── Write API ──────────────────────────────────────────────────────────────

    def update_status(self, page_id: str, status: str) -> None:
        """Set the ``Status`` select of one application page."""
        self._call(
            "pages.update",
            self._client.pages.update,
            page_id=page_id,
            properties={PROP_STATUS: {"select": {"name": status}}},
        )
        logger.info("Updated page %s status → %s", page_id, status)

    def create_application(self, application: NewApplication, now: datetime | None = None) -> str:
        """Create a page for a freshly logged application and return its id."""
        response = self._call(
            "pages.create",
            self._client.pages.create,
            parent={"database_id": self._database_id},
            properties=application.to_properties(now or datetime.now().astimezone()),
        )
        page_id = str(response.get("id", ""))
        logger.info("Logged %s — %s as page %s", application.company, application.role, page_id)
        return page_id

    # ── Internal helpers ───────────────────────────────────────────────────────

    @staticmethod
    def _call(name: str, method: Any, **kwargs: Any) -> dict[str, Any]:
        logger.debug("Notion → %s", name)
        try:
            response = method(**kwargs)
        except _NOTION_ERRORS as exc:
            raise NotionError(f"Notion {name} failed: {exc}") from exc
        return response if isinstance(response, dict) else {}


# ── Schema boundary ────────────────────────────────────────────────────────────


def parse_application(page: Any) -> JobApplication | None:
    """Map a raw Notion page to a JobApplication.

    Returns None for objects that are not pages with properties. Missing or
    differently-typed properties become empty strings rather than errors.
    """
    if not isinstance(page, dict):
        return None
    props = page.get("properties")
    if not isinstance(props, dict):
        return None

    return JobApplication(
        id=str(page.get("id", "")),
        company=_plain_text(props.get(PROP_COMPANY), "title"),
        role=_plain_text(props.get(PROP_ROLE), "rich_text"),
        status=_select_name(props.get(PROP_STATUS)),
        date_applied=_date_start(props.get(PROP_DATE_APPLIED)),
    )


def _plain_text(prop: Any, kind: str) -> str:
    if not isinstance(prop, dict) or prop.get("type") != kind:
        return ""
    fragments = prop.get(kind) or []
    return "".join(
        str(fragment.get("plain_text", ""))
        for fragment in fragments
        if isinstance(fragment, dict)
    )


def _select_name(prop: Any) -> str:
    if not isinstance(prop, dict) or prop.get("type") != "select":
        return ""
    select = prop.get("select")
    return str(select.get("name", "")) if isinstance(select, dict) else ""


def _date_start(prop: Any) -> str:
    if not isinstance(prop, dict) or prop.get("type") != "date":
        return ""
    date = prop.get("date")
    return str(date.get("start", "")) if isinstance(date, dict) else ""

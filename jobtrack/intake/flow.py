"""Intake flow — browser URL → AI-parsed job fields → one Notion record."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace

from jobtrack.config import Settings
from jobtrack.intake.job_details import parse_job_details
from jobtrack.intake.resumes import import_resume, list_resumes, resolve_resume_folder
from jobtrack.intake.sources import detect_source
from jobtrack.macos.browser import BrowserUnavailableError, get_active_tab_url
from jobtrack.macos.shortcuts import PARSE_JOB, ShortcutError, ShortcutRunner
from jobtrack.notion.database import ApplicationsDatabase, NotionError
from jobtrack.notion.types import NewApplication
from jobtrack.state import FlowState, FlowStateMachine

logger = logging.getLogger(__name__)

#: Seconds between browser checks while the form is open.
URL_POLL_INTERVAL = 2.0


class IntakeError(Exception):
    """A load or submit step failed; the message is fit to show the user."""


@dataclass(frozen=True)
class IntakeForm:
    """Editable form values. ``dropped_file`` takes precedence over ``resume``."""

    company: str = ""
    role: str = ""
    location: str = ""
    timezone: str = ""
    source: str = ""
    url: str = ""
    resume: str = ""
    dropped_file: str | None = None


@dataclass(frozen=True)
class SubmitResult:
    page_id: str
    resume: str
    resume_copied: bool


class IntakeFlow:
    """Drives one `jobtrack log` session from load to submit or cancel.

    Usage::

        flow = IntakeFlow(settings, database, ShortcutRunner())
        form = await flow.load(auto_refresh=True)
        ...  # let the user edit form
        result = await flow.submit(edited_form)
    """

    def __init__(
        self,
        settings: Settings,
        database: ApplicationsDatabase,
        shortcuts: ShortcutRunner,
        *,
        get_url: Callable[[str], str] = get_active_tab_url,
    ) -> None:
        self._settings = settings
        self._database = database
        self._shortcuts = shortcuts
        self._get_url = get_url
        self.machine = FlowStateMachine("intake")
        self.form = IntakeForm()
        self.resumes: list[str] = []

    @property
    def state(self) -> FlowState:
        return self.machine.state

    async def current_url(self) -> str:
        """Active tab URL of the configured browser."""
        return await asyncio.to_thread(self._get_url, self._settings.browser_app)

    async def load(self, auto_refresh: bool) -> IntakeForm:
        """Fill the form from the current tab; re-parse with AI when ``auto_refresh``.

        With auto-refresh off only the URL, source and resume list are
        refreshed and previously entered fields are kept.

        Raises:
            IntakeError: if the browser or the shortcut is unavailable.
        """
        self.machine.transition(FlowState.LOADING)
        try:
            url = await self.current_url()
        except BrowserUnavailableError as exc:
            self.machine.transition(FlowState.ERROR)
            raise IntakeError(str(exc)) from exc

        source = detect_source(url)
        self.resumes = list_resumes(resolve_resume_folder(self._settings.resume_folder))
        form = replace(self.form, source=source, url=url)

        if auto_refresh:
            try:
                text = await self._shortcuts.run(PARSE_JOB)
            except ShortcutError as exc:
                self.machine.transition(FlowState.ERROR)
                raise IntakeError(str(exc)) from exc
            details = parse_job_details(text).with_fallbacks()
            form = replace(
                form,
                company=details.company,
                role=details.role,
                location=details.location,
                timezone=details.timezone,
            )
            logger.info("Parsed job: %s — %s (%s)", details.company, details.role, source)

        if self.resumes and form.resume not in self.resumes:
            form = replace(form, resume=self.resumes[0])

        self.form = form
        self.machine.transition(FlowState.READY)
        return form

    async def submit(self, form: IntakeForm) -> SubmitResult:
        """Archive the chosen resume, create the Notion page, re-arm the parser.

        Raises:
            IntakeError: if the resume cannot be copied or Notion rejects the page.
        """
        if self.machine.state != FlowState.READY:
            self.machine.transition(FlowState.SUBMITTED)  # raises InvalidTransitionError

        folder = resolve_resume_folder(self._settings.resume_folder)
        resume_name = ""
        copied = False
        try:
            folder.mkdir(parents=True, exist_ok=True)
            if form.dropped_file:
                resume_name, copied = await asyncio.to_thread(
                    import_resume, form.dropped_file, folder
                )
            elif form.resume:
                resume_name = form.resume

            record = NewApplication(
                company=form.company,
                role=form.role,
                location=form.location,
                timezone=form.timezone,
                source=form.source,
                url=form.url,
                resume=resume_name,
            )
            page_id = await asyncio.to_thread(self._database.create_application, record)
        except (OSError, NotionError) as exc:
            self.machine.transition(FlowState.ERROR)
            raise IntakeError(f"Failed to log application: {exc}") from exc

        self.form = form
        self.machine.transition(FlowState.SUBMITTED)
        # Start parsing in the background so the next `jobtrack log` opens warm.
        self._shortcuts.trigger(PARSE_JOB)
        return SubmitResult(page_id=page_id, resume=resume_name, resume_copied=copied)

    def cancel(self) -> None:
        if not self.machine.finished:
            self.machine.transition(FlowState.CANCELLED)


# ── URL watcher ────────────────────────────────────────────────────────────────


class UrlWatcher:
    """Polls the browser while the form is open and flags a tab change.

    Browser errors during polling are ignored. The watcher stops by itself
    after the first change; ``stop()`` cancels it early.

    Usage::

        watcher = UrlWatcher(form.url, flow.current_url)
        watcher.start()
        try:
            ...
        finally:
            await watcher.stop()
    """

    def __init__(
        self,
        url: str,
        fetch_url: Callable[[], Awaitable[str]],
        on_change: Callable[[str], None] | None = None,
        interval: float = URL_POLL_INTERVAL,
    ) -> None:
        self._url = url
        self._fetch_url = fetch_url
        self._on_change = on_change
        self._interval = interval
        self._task: asyncio.Task[None] | None = None
        self.changed = asyncio.Event()

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run(), name="jobtrack-url-watcher")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _run(self) -> None:
        while not self.changed.is_set():
            await asyncio.sleep(self._interval)
            try:
                current = await self._fetch_url()
            except BrowserUnavailableError:
                continue
            if current != self._url:
                logger.info("Browser tab changed: %s → %s", self._url, current)
                self.changed.set()
                if self._on_change is not None:
                    self._on_change(current)
                return

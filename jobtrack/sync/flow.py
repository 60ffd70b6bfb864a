"""Sync flow — classifier output → matched pending updates → Notion status writes."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from jobtrack.macos.shortcuts import CHECK_JOB_EMAILS, ShortcutError, ShortcutRunner
from jobtrack.matching.matcher import SYNC_MATCH_THRESHOLD, build_pending_updates
from jobtrack.matching.types import EmailStatusUpdate, JobApplication, PendingUpdate
from jobtrack.notion.database import ApplicationsDatabase, NotionError
from jobtrack.state import FlowState, FlowStateMachine
from jobtrack.sync.classifier import parse_classifier_output

logger = logging.getLogger(__name__)

#: Unmatched company names quoted in the "No matches found" message.
MAX_UNMATCHED_SHOWN = 10


@dataclass(frozen=True)
class SyncPlan:
    """Everything gathered before the confirmation gate."""

    updates: list[EmailStatusUpdate] = field(default_factory=list)
    applications: list[JobApplication] = field(default_factory=list)
    pending: list[PendingUpdate] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)

    @property
    def skip_reason(self) -> str | None:
        """Why there is nothing to confirm, or None when ``pending`` is non-empty."""
        if not self.updates:
            return "No status updates found in emails"
        if not self.applications:
            return "No active applications found"
        if not self.pending:
            shown = ", ".join(self.unmatched[:MAX_UNMATCHED_SHOWN])
            return (
                f"No matches found. Emails: {len(self.updates)}, "
                f"Notion apps: {len(self.applications)}. Unmatched: {shown}"
            )
        return None


@dataclass(frozen=True)
class SyncReport:
    succeeded: int
    failed: int
    total: int
    details: list[str] = field(default_factory=list)  # "Company: Status" per success


def summary_lines(plan: SyncPlan) -> list[str]:
    """Confirmation text: one bullet per pending update, then the stats line."""
    lines = [f"• {p.application_company} → {p.new_status.value}" for p in plan.pending]
    lines.append(
        f"({len(plan.pending)} matched, {len(plan.unmatched)} unmatched "
        f"from {len(plan.updates)} emails)"
    )
    return lines


class SyncFlow:
    """Runs one `jobtrack sync` pass.

    Usage::

        flow = SyncFlow(ShortcutRunner(), database)
        plan = await flow.prepare()
        if plan.skip_reason is None and confirmed:
            report = await flow.apply(plan)
    """

    def __init__(
        self,
        shortcuts: ShortcutRunner,
        database: ApplicationsDatabase,
        threshold: float = SYNC_MATCH_THRESHOLD,
    ) -> None:
        self._shortcuts = shortcuts
        self._database = database
        self._threshold = threshold
        self.machine = FlowStateMachine("sync")

    async def prepare(self) -> SyncPlan:
        """Run the email classifier and match its updates against open applications.

        Notion is only queried when the classifier found at least one update.

        Raises:
            ShortcutError: if the classifier shortcut cannot be launched.
            NotionError: if the applications query fails.
        """
        self.machine.transition(FlowState.LOADING)
        try:
            text = await self._shortcuts.run(CHECK_JOB_EMAILS)
            updates = parse_classifier_output(text)
            if not updates:
                plan = SyncPlan()
            else:
                applications = await asyncio.to_thread(self._database.query_open_applications)
                outcome = build_pending_updates(
                    updates, applications, threshold=self._threshold
                )
                plan = SyncPlan(
                    updates=updates,
                    applications=applications,
                    pending=outcome.pending,
                    unmatched=outcome.unmatched,
                )
        except (ShortcutError, NotionError):
            self.machine.transition(FlowState.ERROR)
            raise

        logger.info(
            "Sync plan: %d update(s), %d application(s), %d pending, %d unmatched",
            len(plan.updates),
            len(plan.applications),
            len(plan.pending),
            len(plan.unmatched),
        )
        self.machine.transition(FlowState.READY)
        return plan

    async def apply(self, plan: SyncPlan) -> SyncReport:
        """Write every pending status; one failed write does not stop the rest."""
        succeeded = 0
        failed = 0
        details: list[str] = []

        for pending in plan.pending:
            try:
                await asyncio.to_thread(
                    self._database.update_status,
                    pending.application_id,
                    pending.new_status.value,
                )
            except NotionError as exc:
                failed += 1
                logger.error("Failed to update %s: %s", pending.application_company, exc)
                continue
            succeeded += 1
            details.append(f"{pending.application_company}: {pending.new_status.value}")

        self.machine.transition(FlowState.SUBMITTED)
        return SyncReport(
            succeeded=succeeded, failed=failed, total=len(plan.pending), details=details
        )

    def cancel(self) -> None:
        if not self.machine.finished:
            self.machine.transition(FlowState.CANCELLED)

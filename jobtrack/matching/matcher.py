"""Pair classifier updates with tracked applications by fuzzy company name."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from jobtrack.matching.similarity import fuzzy_match
from jobtrack.matching.types import EmailStatusUpdate, JobApplication, PendingUpdate

#: Score a candidate must strictly exceed by default.
DEFAULT_MATCH_THRESHOLD = 0.7
#: Looser threshold used by `jobtrack sync`; recruiter mail rarely spells the
#: company exactly as it was logged.
SYNC_MATCH_THRESHOLD = 0.6

Scorer = Callable[[str, str], float]


def find_matching_application(
    applications: Iterable[JobApplication],
    company: str,
    scorer: Scorer = fuzzy_match,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> JobApplication | None:
    """Return the application whose company scores highest against ``company``.

    A candidate only replaces the current best when its score is strictly
    greater than both the threshold and the best score so far, so ties go
    to the earliest application in iteration order.
    """
    best_match: JobApplication | None = None
    best_score = 0.0

    for application in applications:
        score = scorer(application.company, company)
        if score > threshold and score > best_score:
            best_score = score
            best_match = application

    return best_match


@dataclass(frozen=True)
class MatchOutcome:
    """Pending updates (one per application) plus company names left unmatched."""

    pending: list[PendingUpdate] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)


def build_pending_updates(
    updates: Iterable[EmailStatusUpdate],
    applications: Sequence[JobApplication],
    scorer: Scorer = fuzzy_match,
    threshold: float = SYNC_MATCH_THRESHOLD,
) -> MatchOutcome:
    """Resolve every update to an application, keeping one update per application id.

    When several updates resolve to the same application the first one wins;
    later duplicates are dropped rather than reported as unmatched.
    """
    pending: list[PendingUpdate] = []
    unmatched: list[str] = []
    seen_ids: set[str] = set()

    for update in updates:
        application = find_matching_application(applications, update.company, scorer, threshold)
        if application is None:
            unmatched.append(update.company)
            continue
        if application.id in seen_ids:
            continue
        seen_ids.add(application.id)
        pending.append(
            PendingUpdate(
                update=update,
                application_id=application.id,
                application_company=application.company,
                application_role=application.role,
            )
        )

    return MatchOutcome(pending=pending, unmatched=unmatched)

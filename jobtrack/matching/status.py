"""Keyword-based status classification for job-application emails."""

from __future__ import annotations

from dataclasses import dataclass

from jobtrack.matching.types import StatusKind

SUBJECT_CONFIDENCE = 0.9
BODY_CONFIDENCE = 0.7


def _rules(kind: StatusKind, *keywords: str) -> tuple[tuple[StatusKind, str], ...]:
    return tuple((kind, keyword) for keyword in keywords)


#: Ordered (kind, keyword) table. The first keyword found anywhere in the
#: email wins, so a kind listed earlier beats every kind listed after it.
#: Keyword lists are hand-tuned; "decided to move forward with" under
#: Rejected is kept as-is even though it reads like a positive outcome.
STATUS_RULES: tuple[tuple[StatusKind, str], ...] = (
    *_rules(
        StatusKind.INTERVIEW,
        "schedule interview",
        "interview invitation",
        "phone screen",
        "technical interview",
        "onsite interview",
        "virtual interview",
        "video interview",
        "interview request",
        "would like to schedule",
        "next steps in the interview",
        "move forward with an interview",
        "invite you to interview",
        "discuss your application",
        "speak with you",
        "meet with our team",
    ),
    *_rules(
        StatusKind.REJECTED,
        "unfortunately",
        "regret to inform",
        "not moving forward",
        "other candidates",
        "decided not to proceed",
        "will not be moving forward",
        "not a fit",
        "position has been filled",
        "pursue other candidates",
        "not selected",
        "after careful consideration",
        "decided to move forward with",
        "not the right match",
        "competitive applicant pool",
    ),
    *_rules(
        StatusKind.OFFER,
        "offer letter",
        "pleased to offer",
        "congratulations",
        "extend an offer",
        "job offer",
        "offer of employment",
        "welcome to the team",
        "excited to have you join",
        "start date",
        "compensation package",
    ),
    *_rules(
        StatusKind.ASSESSMENT,
        "coding challenge",
        "take-home",
        "assessment",
        "technical test",
        "skills test",
        "online test",
        "complete the following",
        "hackerrank",
        "codility",
        "codesignal",
        "leetcode",
    ),
)


@dataclass(frozen=True)
class StatusDetection:
    """Result of detect_status(); ``status`` is None when nothing matched."""

    status: StatusKind | None
    confidence: float
    keyword: str | None = None


NO_MATCH = StatusDetection(status=None, confidence=0.0)


def detect_status(
    subject: str,
    snippet: str,
    body: str | None = None,
    rules: tuple[tuple[StatusKind, str], ...] = STATUS_RULES,
) -> StatusDetection:
    """Classify an email by the first rule whose keyword appears in it.

    Confidence is 0.9 when the winning keyword is in the subject line and
    0.7 when it only appears in the snippet or body.
    """
    content = f"{subject} {snippet} {body or ''}".lower()
    subject_lower = subject.lower()

    for kind, keyword in rules:
        needle = keyword.lower()
        if needle in content:
            confidence = SUBJECT_CONFIDENCE if needle in subject_lower else BODY_CONFIDENCE
            return StatusDetection(status=kind, confidence=confidence, keyword=keyword)

    return NO_MATCH

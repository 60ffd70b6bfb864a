"""Tests for keyword-based status detection."""

from jobtrack.matching.status import (
    BODY_CONFIDENCE,
    NO_MATCH,
    STATUS_RULES,
    SUBJECT_CONFIDENCE,
    detect_status,
)
from jobtrack.matching.types import StatusKind


class TestDetectStatus:
    def test_subject_keyword_gets_high_confidence(self) -> None:
        result = detect_status("Interview invitation", "")
        assert result.status == StatusKind.INTERVIEW
        assert result.confidence == SUBJECT_CONFIDENCE
        assert result.keyword == "interview invitation"

    def test_snippet_keyword_gets_lower_confidence(self) -> None:
        result = detect_status("Update on your application", "Unfortunately we went another way.")
        assert result.status == StatusKind.REJECTED
        assert result.confidence == BODY_CONFIDENCE

    def test_body_is_searched(self) -> None:
        result = detect_status("Hello", "", body="Please finish the HackerRank problems.")
        assert result.status == StatusKind.ASSESSMENT
        assert result.confidence == BODY_CONFIDENCE

    def test_matching_is_case_insensitive(self) -> None:
        result = detect_status("JOB OFFER ENCLOSED", "")
        assert result.status == StatusKind.OFFER

    def test_earlier_kind_wins_over_later_kind(self) -> None:
        # Offer keyword in the subject, interview keyword in the snippet.
        result = detect_status("Congratulations", "We would like to schedule a call.")
        assert result.status == StatusKind.INTERVIEW
        assert result.confidence == BODY_CONFIDENCE

    def test_move_forward_with_counts_as_rejection(self) -> None:
        result = detect_status("Your application", "We have decided to move forward with others.")
        assert result.status == StatusKind.REJECTED

    def test_rejection_phrase_in_subject(self) -> None:
        result = detect_status("Unfortunately, after careful consideration", "")
        assert result.status == StatusKind.REJECTED
        assert result.confidence == 0.9

    def test_newsletter_signup_is_not_a_status(self) -> None:
        result = detect_status("Thanks for your newsletter signup", "")
        assert result.status is None
        assert result.confidence == 0.0

    def test_no_keyword_returns_no_match(self) -> None:
        result = detect_status("Weekly newsletter", "Top stories this week")
        assert result == NO_MATCH
        assert result.status is None
        assert result.confidence == 0.0

    def test_custom_rules_can_be_supplied(self) -> None:
        rules = ((StatusKind.OFFER, "ship it"),)
        assert detect_status("ship it", "", rules=rules).status == StatusKind.OFFER
        assert detect_status("Interview invitation", "", rules=rules) == NO_MATCH


class TestStatusRules:
    def test_kinds_appear_in_priority_order(self) -> None:
        order: list[StatusKind] = []
        for kind, _ in STATUS_RULES:
            if kind not in order:
                order.append(kind)
        assert order == [
            StatusKind.INTERVIEW,
            StatusKind.REJECTED,
            StatusKind.OFFER,
            StatusKind.ASSESSMENT,
        ]


class TestStatusKindParse:
    def test_parse_is_case_insensitive(self) -> None:
        assert StatusKind.parse("interview") == StatusKind.INTERVIEW
        assert StatusKind.parse(" OFFER ") == StatusKind.OFFER

    def test_unknown_or_non_string_is_none(self) -> None:
        assert StatusKind.parse("Ghosted") is None
        assert StatusKind.parse(None) is None
        assert StatusKind.parse(3) is None

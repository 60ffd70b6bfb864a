"""Tests for extract_company_name."""

from jobtrack.matching.company import extract_company_name


class TestDisplayName:
    def test_recruiting_suffix_is_removed(self) -> None:
        assert extract_company_name("Acme Recruiting <jobs@acme.com>", "") == "Acme"

    def test_talent_prefix_is_removed(self) -> None:
        assert extract_company_name("Talent at Initech <t@initech.io>", "") == "Initech"

    def test_recruiting_at_prefix_is_removed(self) -> None:
        assert extract_company_name("Recruiting at Acme <hr@acme.com>", "") == "Acme"

    def test_plain_display_name_is_kept(self) -> None:
        assert extract_company_name("Hooli <noreply@hooli.xyz>", "") == "Hooli"

    def test_single_character_name_falls_back_to_domain(self) -> None:
        assert extract_company_name("X <careers@umbrella.com>", "") == "Umbrella"


class TestDomain:
    def test_domain_label_is_capitalised(self) -> None:
        assert extract_company_name("jobs@initech.com", "") == "Initech"

    def test_first_label_of_multi_part_domain(self) -> None:
        assert extract_company_name("careers@globex.co.uk", "") == "Globex"

    def test_generic_domain_falls_through_to_subject(self) -> None:
        sender = "no-reply@greenhouse.io"
        assert extract_company_name(sender, "Thank you for applying at Globex Corp") == "Globex Corp"


class TestSubject:
    def test_company_before_dash(self) -> None:
        result = extract_company_name("no-reply@lever.co", "Your application with Hooli - next steps")
        assert result == "Hooli"

    def test_company_before_for(self) -> None:
        result = extract_company_name("someone@gmail.com", "Interview from Stark Industries for SWE")
        assert result == "Stark Industries"

    def test_company_after_at_at_end_of_subject(self) -> None:
        result = extract_company_name("jane@gmail.com", "Interview for Backend role at Initech")
        assert result == "Initech"

    def test_nothing_found_returns_none(self) -> None:
        assert extract_company_name("someone@gmail.com", "Hello there") is None

"""Tests for refusal / right-to-work phrase scanning."""
import pytest

from sponsorcheck.phrases import NO_MATCH_TEXT, PhraseMatchSet, scan


class TestScan:

    @pytest.mark.parametrize("text", [
        "Please note we do not sponsor work visas for this role.",
        "Unfortunately we don't sponsor.",
        "This employer does not offer visa sponsorship.",
        "No work sponsorship is available.",
        "We cannot sponsor applicants.",
    ])
    def test_explicit_refusal(self, text):
        result = scan(text)
        assert "Explicit no sponsorship" in result
        assert result.refusals == ("Explicit no sponsorship",)

    @pytest.mark.parametrize("text", [
        "There is no certificate of sponsorship for this post.",
        "We will not provide a CoS.",
        "The Trust cannot provide a certificate of sponsorship.",
        "NO COS available",
    ])
    def test_no_cos(self, text):
        assert "No CoS" in scan(text)

    def test_right_to_work_is_a_warning(self):
        result = scan("Applicants must have the right to work in the UK.")

        assert result.labels == ("Right to work required (warning)",)
        assert result.warnings == ("Right to work required (warning)",)
        assert result.refusals == ()

    def test_multiple_labels_in_pattern_order(self):
        text = (
            "You must already have the right to work. "
            "We cannot provide a CoS and we do not sponsor visas."
        )
        result = scan(text)

        assert list(result) == [
            "Explicit no sponsorship",
            "No CoS",
            "Right to work required (warning)",
        ]
        assert len(result) == 3
        assert result.summary == "Explicit no sponsorship | No CoS | Right to work required (warning)"

    def test_nothing_found(self):
        result = scan("Great benefits, hybrid working and a friendly team. Visa sponsorship available.")

        assert not result.found
        assert result.summary == NO_MATCH_TEXT
        assert str(result) == "No obvious refusal language found"

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text(self, text):
        assert scan(text) == PhraseMatchSet()
        assert scan(text).summary == NO_MATCH_TEXT

    def test_cost_is_not_cos(self):
        assert "No CoS" not in scan("There is no cost to apply.")

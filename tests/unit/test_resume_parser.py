"""Unit tests for the resume parser outcome (Parsed | Fallback)."""

import pytest

from resumefit.contexts.intake import resume_parser
from resumefit.contexts.intake.resume_parser import (
    EMPTY_INPUT_REASON,
    Fallback,
    Parsed,
    parse_resume,
    parse_resume_outcome,
)
from resumefit.contexts.templating.defaults import get_default_resume


@pytest.fixture
def defaults():
    return get_default_resume()


@pytest.mark.unit
class TestEmptyInput:
    """Empty or non-text input yields the default template."""

    def test_empty_string_and_none_agree(self, defaults):
        assert parse_resume("", defaults=defaults) == parse_resume(None, defaults=defaults)
        assert parse_resume("", defaults=defaults) == defaults

    def test_whitespace_only(self, defaults):
        outcome = parse_resume_outcome("  \n\t\n ", defaults=defaults)

        assert isinstance(outcome, Fallback)
        assert outcome.reasons == (EMPTY_INPUT_REASON,)
        assert outcome.document == defaults

    def test_non_string_never_raises(self, defaults):
        assert parse_resume(42, defaults=defaults) == defaults


@pytest.mark.unit
def test_sample_parses_cleanly(sample_resume_text, defaults):
    """Test a complete resume needs no backfilling."""
    outcome = parse_resume_outcome(sample_resume_text, defaults=defaults)

    assert isinstance(outcome, Parsed)
    assert not outcome.is_fallback
    assert outcome.missing_fields == ()
    assert outcome.document.personal_info.name == "Jane Doe"
    assert len(outcome.document.experience) == 4


@pytest.mark.unit
def test_sparse_resume_is_backfilled(defaults):
    """Test fields the parser cannot locate come from the default template."""
    outcome = parse_resume_outcome("Jane Doe\njane@example.com", defaults=defaults)

    assert isinstance(outcome, Parsed)
    assert "personal_info.phone" in outcome.missing_fields
    assert "experience" in outcome.missing_fields
    assert outcome.document.personal_info.name == "Jane Doe"
    assert outcome.document.personal_info.phone == defaults.personal_info.phone
    assert outcome.document.experience == defaults.experience
    assert outcome.document.certifications == ()


@pytest.mark.unit
def test_failing_extractor_yields_fallback(monkeypatch, sample_resume_text, defaults):
    """Test one extractor failing degrades the parse without losing the rest."""

    def boom(*args, **kwargs):
        raise RuntimeError("skills table corrupted")

    monkeypatch.setattr(resume_parser, "extract_skills", boom)
    outcome = parse_resume_outcome(sample_resume_text, defaults=defaults)

    assert isinstance(outcome, Fallback)
    assert outcome.reasons == ("skills: RuntimeError: skills table corrupted",)
    assert outcome.document.core_competencies == defaults.core_competencies
    assert outcome.document.personal_info.name == "Jane Doe"


@pytest.mark.unit
def test_contact_experience_and_education(defaults):
    """Test a short three-section resume parses field by field."""
    text = (
        "Jane Doe\njane@x.com\n555-123-4567\n\n"
        "PROFESSIONAL EXPERIENCE\n"
        "Acme Corp\t2019 -- 2022\nCashier\n• Helped customers\n\n"
        "EDUCATION\nBachelor of Arts, State University, 2015\n"
    )
    document = parse_resume(text, defaults=defaults)

    assert document.personal_info.name == "Jane Doe"
    assert document.personal_info.email == "jane@x.com"
    assert len(document.experience) == 1
    entry = document.experience[0]
    assert entry.company == "Acme Corp"
    assert entry.duration == "2019 -- 2022"
    assert entry.title == "Cashier"
    assert entry.achievements == ("Helped customers",)
    assert len(document.education) == 1
    assert document.education[0].degree.startswith("Bachelor")


@pytest.mark.unit
def test_unloadable_default_template_yields_fallback(monkeypatch, tmp_path):
    """Test a missing default template degrades the parse instead of raising."""
    monkeypatch.setenv("RESUMEFIT_DEFAULT_RESUME", str(tmp_path / "missing.yaml"))

    outcome = parse_resume_outcome("Jane Doe\njane@x.com")

    assert isinstance(outcome, Fallback)
    assert outcome.reasons[0].startswith("default template: FileNotFoundError")
    assert outcome.document.personal_info.name == "Jane Doe"
    assert parse_resume(None) == parse_resume("")

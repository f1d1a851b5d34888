"""
Integration test for the default template and environment configuration.
Tests: env overrides flow through OmegaConf into defaults and keyword tables.
"""

import pytest

from resumefit.contexts.intake.resume_parser import parse_resume
from resumefit.contexts.templating.defaults import get_default_resume
from resumefit.utils.keyword_tables import load_keyword_tables


@pytest.mark.integration
def test_default_resume_is_complete():
    """Test the packaged default template fills every backfilled field."""
    default = get_default_resume()

    assert default.missing_fields() == ()
    assert default.personal_info.name
    assert default.certifications == ()
    assert all(entry.achievements for entry in default.experience)


@pytest.mark.integration
def test_default_resume_is_stable():
    assert get_default_resume() == get_default_resume()


@pytest.mark.integration
def test_env_overrides_personal_info(monkeypatch):
    monkeypatch.setenv("YOUR_NAME", "Pat Example")
    monkeypatch.setenv("YOUR_EMAIL", "pat@example.com")

    default = get_default_resume()
    assert default.personal_info.name == "Pat Example"
    assert default.personal_info.email == "pat@example.com"
    assert parse_resume(None) == default


@pytest.mark.integration
def test_custom_default_template(monkeypatch, tmp_path):
    path = tmp_path / "default.yaml"
    path.write_text(
        "resume:\n"
        "  personal_info: {name: Sam Sample}\n"
        "  professional_summary: Reliable worker.\n"
        "  core_competencies: [Teamwork]\n"
        "  experience: []\n"
        "  education: []\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("RESUMEFIT_DEFAULT_RESUME", str(path))

    default = get_default_resume()
    assert default.personal_info.name == "Sam Sample"
    assert default.core_competencies == ("Teamwork",)


@pytest.mark.integration
def test_keyword_tables_from_env(monkeypatch, tmp_path):
    path = tmp_path / "tables.yaml"
    path.write_text(
        "version: 2\n"
        "categories: {general: []}\n"
        "related_groups: {}\n"
        "title_keywords: []\n"
        "transferable_skills: {}\n"
        "industry_buckets: {}\n"
        "keyword_bank: {}\n"
        "common_keywords: []\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("RESUMEFIT_KEYWORD_TABLES", str(path))

    assert load_keyword_tables().version == 2

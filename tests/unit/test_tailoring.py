"""
Unit tests for the tailoring pipeline.

Tests each pipeline step on its own, then TailoringEngine error handling.
"""

import pytest

from resumefit.contexts.intake.job_posting import JobPosting
from resumefit.contexts.intake.resume_parser import parse_resume
from resumefit.contexts.targeting.tailoring import (
    MAX_COMPETENCIES,
    NO_KEYWORDS_ATS_SCORE,
    TailoringEngine,
    keyword_report,
    placeholder_achievements,
    rebuild_summary,
    reorder_competencies,
    rewrite_achievement,
    select_relevant_certifications,
    tailor_for_job,
    tailor_objective,
)
from resumefit.contexts.templating.resume_data_structure import ExperienceEntry, ResumeDocument

DATA_ENTRY_KEYWORDS = frozenset(
    {"data entry clerk", "customer service", "data entry", "scheduling", "filing", "clerk"}
)


@pytest.fixture
def sample_document(sample_resume_text, tables):
    return parse_resume(sample_resume_text, tables=tables)


@pytest.mark.unit
class TestRewriteAchievement:
    """Vocabulary rewrites swap synonyms only when the job asks for them."""

    def test_rewrite_applied(self, tables):
        assert (
            rewrite_achievement("Helped clients with returns", DATA_ENTRY_KEYWORDS, tables)
            == "Helped customers with returns"
        )

    def test_case_preserved(self, tables):
        assert rewrite_achievement("Keyed invoices daily", DATA_ENTRY_KEYWORDS, tables) == "Entered invoices daily"

    def test_not_applied_without_trigger(self, tables):
        keywords = frozenset({"retail sales"})
        assert rewrite_achievement("Helped clients with returns", keywords, tables) == "Helped clients with returns"

    def test_second_pass_is_noop(self, tables):
        once = rewrite_achievement("Booked appointments for clients", DATA_ENTRY_KEYWORDS, tables)
        assert once == "Scheduled appointments for customers"
        assert rewrite_achievement(once, DATA_ENTRY_KEYWORDS, tables) == once


@pytest.mark.unit
class TestCompetencies:
    """Competency reordering is a capped stable partition."""

    def test_relevant_first_order_kept(self):
        competencies = ["Cash Handling", "Data Entry", "Forklift", "Scheduling", "Merchandising", "Filing"]
        assert reorder_competencies(competencies, DATA_ENTRY_KEYWORDS) == (
            "Data Entry",
            "Scheduling",
            "Filing",
            "Cash Handling",
            "Forklift",
            "Merchandising",
        )

    def test_capped(self):
        competencies = [f"Skill {i}" for i in range(20)]
        assert len(reorder_competencies(competencies, DATA_ENTRY_KEYWORDS)) == MAX_COMPETENCIES

    def test_is_a_permutation_prefix(self):
        competencies = ["Typing", "Customer Service", "Typing Speed"]
        assert sorted(reorder_competencies(competencies, DATA_ENTRY_KEYWORDS)) == sorted(competencies)


@pytest.mark.unit
class TestRebuildSummary:
    """Summary rebuilding: title prefix plus at most three area phrases."""

    def test_prefix_and_phrases(self, tables):
        summary = rebuild_summary("Dependable office professional.", "Data Entry Clerk", DATA_ENTRY_KEYWORDS, tables)
        assert summary == (
            "Data Entry Clerk | Dependable office professional. "
            "Experience includes customer service excellence, data management and analysis."
        )

    def test_idempotent(self, tables):
        once = rebuild_summary("Dependable office professional.", "Data Entry Clerk", DATA_ENTRY_KEYWORDS, tables)
        assert rebuild_summary(once, "Data Entry Clerk", DATA_ENTRY_KEYWORDS, tables) == once

    def test_idempotent_with_empty_summary(self, tables):
        once = rebuild_summary("", "Data Entry Clerk", DATA_ENTRY_KEYWORDS, tables)
        assert once.startswith("Data Entry Clerk Experience includes")
        assert rebuild_summary(once, "Data Entry Clerk", DATA_ENTRY_KEYWORDS, tables) == once

    def test_at_most_three_phrases(self, tables):
        keywords = frozenset({"customer service", "data entry", "administrative support", "retail sales"})
        summary = rebuild_summary("Hard worker.", "Clerk", keywords, tables)
        phrases = summary.split("Experience includes ")[1].rstrip(".").split(", ")

        assert len(phrases) == 3

    def test_existing_phrase_not_repeated(self, tables):
        summary = rebuild_summary(
            "Known for customer service excellence.", "Clerk", frozenset({"customer service"}), tables
        )
        assert summary == "Clerk | Known for customer service excellence."


@pytest.mark.unit
class TestCertifications:
    """Certifications are selected, never created."""

    def test_relevant_subset(self, tables):
        job = JobPosting(title="Warehouse Associate", description="Forklift operation and shipping")
        certs = ("Certified Pharmacy Technician", "Forklift Certification")

        assert select_relevant_certifications(certs, job, tables) == ("Forklift Certification",)

    def test_all_kept_when_none_relevant(self, tables, data_entry_job):
        certs = ("Certified Pharmacy Technician", "Forklift Certification")
        assert select_relevant_certifications(certs, data_entry_job, tables) == certs

    def test_fabricated_dropped(self, tables, data_entry_job):
        certs = ("Data Entry Professional Certificate", "Forklift Certification")
        assert select_relevant_certifications(certs, data_entry_job, tables) == ("Forklift Certification",)


@pytest.mark.unit
def test_placeholder_achievements(tables):
    """Test placeholder lines only restate the role."""
    entry = ExperienceEntry(title="Cashier", company="Fresh Market")
    assert placeholder_achievements(entry, "retail", tables) == (
        "Served as Cashier at Fresh Market.",
        "Role focused on retail operations.",
    )


@pytest.mark.unit
def test_tailor_objective():
    assert tailor_objective(JobPosting(title="Retail Associate", company="Fresh Market")) == (
        "Enthusiastic retail professional seeking a Retail Associate position at Fresh Market "
        "where I can contribute to sales goals and provide excellent customer experiences."
    )
    assert tailor_objective(JobPosting(title="Welder")).startswith("Motivated professional seeking a Welder position where")


@pytest.mark.unit
def test_keyword_report_without_keywords():
    assert keyword_report(ResumeDocument(), frozenset()) == (NO_KEYWORDS_ATS_SCORE, ())


@pytest.mark.unit
class TestTailoringEngine:
    """Tests for TailoringEngine.tailor."""

    def test_keeps_top_four(self, sample_document, data_entry_job, tables):
        extra = ExperienceEntry(title="Clerk", company="Acme", duration="2010 - 2012", achievements=("Filed",))
        resume = ResumeDocument(experience=sample_document.experience + (extra,))
        result = TailoringEngine(tables).tailor(resume, data_entry_job)

        assert len(result.document.experience) == 4
        assert len(result.ranking) == 5
        assert result.document.experience[0].company == "Evergreen Service Center"

    def test_base_resume_unchanged(self, sample_document, data_entry_job, tables):
        snapshot = sample_document.to_dict()
        TailoringEngine(tables).tailor(sample_document, data_entry_job)

        assert sample_document.to_dict() == snapshot

    def test_entry_without_achievements_gets_placeholders(self, data_entry_job, tables):
        resume = ResumeDocument(experience=(ExperienceEntry(title="Cashier", company="Fresh Market"),))
        result = TailoringEngine(tables).tailor(resume, data_entry_job)

        assert result.document.experience[0].achievements == (
            "Served as Cashier at Fresh Market.",
            "Role focused on retail operations.",
        )

    def test_dict_job(self, sample_document, tables):
        result = TailoringEngine(tables).tailor(sample_document, {"title": "Cashier", "company": "Fresh Market"})

        assert result.applied
        assert result.job_category == "retail"
        assert result.document.experience[0].company == "Fresh Market"

    def test_invalid_job_returns_base(self, sample_document, tables):
        result = TailoringEngine(tables).tailor(sample_document, {"company": "No Title Inc"})

        assert not result.applied
        assert "InvalidJobPostingError" in result.failure_reason
        assert result.document is sample_document
        assert result.notes == ("Used base resume due to tailoring error",)

    def test_non_job_input_returns_base(self, sample_document, tables):
        result = TailoringEngine(tables).tailor(sample_document, None)
        assert not result.applied
        assert result.document is sample_document

    def test_internal_failure_returns_base(self, monkeypatch, sample_document, data_entry_job, tables):
        engine = TailoringEngine(tables)

        def boom(*args, **kwargs):
            raise RuntimeError("scorer exploded")

        monkeypatch.setattr(engine.scorer, "rank", boom)
        result = engine.tailor(sample_document, data_entry_job)

        assert not result.applied
        assert result.failure_reason == "RuntimeError: scorer exploded"
        assert result.job == data_entry_job

    def test_deterministic(self, sample_document, data_entry_job, tables):
        first = tailor_for_job(sample_document, data_entry_job, tables)
        second = tailor_for_job(sample_document, data_entry_job, tables)
        assert first == second

    def test_retailoring_is_stable(self, sample_document, data_entry_job, tables):
        once = tailor_for_job(sample_document, data_entry_job, tables)
        twice = tailor_for_job(once, data_entry_job, tables)

        assert twice.professional_summary == once.professional_summary
        assert twice.core_competencies == once.core_competencies
        assert twice.experience == once.experience

"""
Unit tests for relevance scoring.

Scores for the sample resume against the data entry job:

    Evergreen Service Center   110  same category, shared industry bucket, keyword, 2016
    Harbor Medical Clinic       60  related category, technical skills, present
    Fresh Market                48  related category, 2021
    First National Bank         45  related category, 2016
"""

import pytest

from resumefit.contexts.intake.job_posting import JobPosting
from resumefit.contexts.intake.resume_parser import parse_resume
from resumefit.contexts.targeting.job_keywords import extract_job_keywords, sorted_keywords
from resumefit.contexts.targeting.relevance import RelevanceScorer, recency_points
from resumefit.contexts.templating.resume_data_structure import ExperienceEntry


@pytest.fixture
def scorer(tables):
    return RelevanceScorer(tables)


@pytest.fixture
def sample_entries(sample_resume_text, tables):
    return parse_resume(sample_resume_text, tables=tables).experience


@pytest.mark.unit
def test_recency_points():
    assert recency_points("2019 -- Present") == 10
    assert recency_points("2020 - Current") == 10
    assert recency_points("2018 - 2020") == 8
    assert recency_points("2012 - 2016") == 5
    assert recency_points("2001 - 2004") == 0
    assert recency_points("") == 0


@pytest.mark.unit
def test_job_keywords(data_entry_job, tables):
    """Test the keyword set holds the title plus bank and common keywords found."""
    keywords = extract_job_keywords(data_entry_job, tables)

    assert keywords == {
        "data entry clerk",
        "customer service",
        "data entry",
        "scheduling",
        "filing",
        "microsoft office",
        "detail",
        "clerk",
    }
    assert sorted_keywords(keywords)[:3] == ["customer service", "data entry clerk", "microsoft office"]


@pytest.mark.unit
class TestRank:
    """Tests for ranking the sample resume."""

    def test_order_and_scores(self, scorer, sample_entries, data_entry_job):
        ranked = scorer.rank(sample_entries, data_entry_job)

        assert [s.entry.company for s in ranked] == [
            "Evergreen Service Center",
            "Harbor Medical Clinic",
            "Fresh Market",
            "First National Bank",
        ]
        assert [s.score for s in ranked] == [110, 60, 48, 45]

    def test_breakdown(self, scorer, sample_entries, data_entry_job):
        top = scorer.rank(sample_entries, data_entry_job)[0]

        assert top.breakdown == {
            "category": 80,
            "title_keywords": 0,
            "transferable_skills": 0,
            "industry": 20,
            "job_keywords": 5,
            "recency": 5,
        }

    def test_transferable_only_across_categories(self, scorer, sample_entries, data_entry_job):
        ranked = {s.entry.company: s for s in scorer.rank(sample_entries, data_entry_job)}

        assert ranked["Harbor Medical Clinic"].breakdown["transferable_skills"] == 10
        assert ranked["Evergreen Service Center"].breakdown["transferable_skills"] == 0

    def test_ties_keep_source_order(self, scorer, data_entry_job):
        first = ExperienceEntry(title="Clerk", company="Alpha", duration="2019 - 2020", achievements=("x",))
        second = ExperienceEntry(title="Clerk", company="Beta", duration="2019 - 2020", achievements=("x",))
        ranked = scorer.rank([first, second], data_entry_job)

        assert ranked[0].score == ranked[1].score
        assert [s.index for s in ranked] == [0, 1]

    def test_score_floored_at_zero(self, scorer, data_entry_job):
        entry = ExperienceEntry(
            title="Welder", company="Steel Works", duration="2001 - 2003", achievements=("Welded frames",)
        )
        assert scorer.score_breakdown(entry, data_entry_job)["category"] == -20
        assert scorer.score(entry, data_entry_job) == 0


@pytest.mark.unit
def test_same_category_outranks_unrelated(scorer):
    """Test an entry matching the job category ranks above an otherwise equal unrelated one."""
    job = JobPosting(title="Crew Member", description="Roofing crew for residential jobs.")
    unrelated = ExperienceEntry(title="Crew Member", company="Alpha Grocery", duration="2019 - 2020")
    same = ExperienceEntry(title="Crew Member", company="Alpha Roofing", duration="2019 - 2020")

    ranked = scorer.rank([unrelated, same], job)

    assert ranked[0].entry is same
    assert ranked[0].score > ranked[1].score
    assert ranked[0].breakdown["category"] == 80
    assert ranked[1].breakdown["category"] == -20

@pytest.mark.unit
def test_title_keyword_points(scorer):
    """Test +15 per role word shared between entry title and job title."""
    job = JobPosting(title="Customer Service Associate")
    entry = ExperienceEntry(title="Customer Service Representative", company="Acme")

    assert scorer.title_keyword_points(entry, job) == 30

"""
Relevance scoring of experience entries against a job.

The score for one entry is the sum of:

    category        +80 same category, +40 related group, -20 otherwise
    title keywords  +15 per role keyword in both the entry title and job title
    transferable    +10 per transferable-skill group in both texts
                    (only when the categories differ)
    industry        +20 if entry company and job company share a bucket
    job keywords    +5 per job keyword found in the entry text
    recency         +10 "present", else +8 for a 2020s year, else +5 for 2015-2019

floored at 0. Scores are transient: they live on ScoredExperience during
tailoring and are never written onto the ResumeDocument.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence

from resumefit.contexts.intake.job_posting import JobPosting
from resumefit.contexts.targeting.categorizer import JobCategorizer
from resumefit.contexts.targeting.job_keywords import extract_job_keywords
from resumefit.contexts.templating.resume_data_structure import ExperienceEntry
from resumefit.utils.keyword_tables import KeywordTables, default_keyword_tables
from resumefit.utils.text_processing import contains_term

SAME_CATEGORY_POINTS = 80
RELATED_CATEGORY_POINTS = 40
UNRELATED_CATEGORY_POINTS = -20
TITLE_KEYWORD_POINTS = 15
TRANSFERABLE_SKILL_POINTS = 10
INDUSTRY_POINTS = 20
JOB_KEYWORD_POINTS = 5
RECENCY_PRESENT_POINTS = 10
RECENCY_2020S_POINTS = 8
RECENCY_2015_2019_POINTS = 5

RECENT_YEAR = re.compile(r"\b202\d\b")
MID_YEAR = re.compile(r"\b201[5-9]\b")


@dataclass(frozen=True)
class ScoredExperience:
    """
    An experience entry with its transient relevance score.

    Attributes:
        entry: The scored entry (unchanged)
        score: Total score, floored at 0
        index: Position in the source resume (tie breaker)
        breakdown: Points per factor before flooring
    """

    entry: ExperienceEntry
    score: int
    index: int
    breakdown: Dict[str, int] = field(default_factory=dict)


def recency_points(duration: str) -> int:
    """
    Recency bonus for a duration string.

    Example:
        >>> recency_points("2019 -- Present")
        10
        >>> recency_points("2018 - 2020")
        8
        >>> recency_points("2012 - 2016")
        5
    """
    lowered = duration.lower()
    if "present" in lowered or "current" in lowered:
        return RECENCY_PRESENT_POINTS
    if RECENT_YEAR.search(lowered):
        return RECENCY_2020S_POINTS
    if MID_YEAR.search(lowered):
        return RECENCY_2015_2019_POINTS
    return 0


class RelevanceScorer:
    """
    Scores experience entries against a job.

    Usage:
        scorer = RelevanceScorer()
        ranked = scorer.rank(resume.experience, job)
        top = ranked[:4]
    """

    def __init__(
        self,
        tables: Optional[KeywordTables] = None,
        categorizer: Optional[JobCategorizer] = None,
    ):
        self.tables = tables or default_keyword_tables()
        self.categorizer = categorizer or JobCategorizer(self.tables)

    # =========================================================================
    # FACTORS
    # =========================================================================

    def category_points(self, entry_category: str, job_category: str) -> int:
        if entry_category == job_category:
            return SAME_CATEGORY_POINTS
        if self.categorizer.are_related(entry_category, job_category):
            return RELATED_CATEGORY_POINTS
        return UNRELATED_CATEGORY_POINTS

    def title_keyword_points(self, entry: ExperienceEntry, job: JobPosting) -> int:
        shared = [
            keyword
            for keyword in self.tables.title_keywords
            if contains_term(entry.title, keyword) and contains_term(job.title, keyword)
        ]
        return TITLE_KEYWORD_POINTS * len(shared)

    def transferable_points(self, entry: ExperienceEntry, job: JobPosting) -> int:
        entry_text = entry.combined_text
        job_text = job.combined_text
        shared = [
            group
            for group, keywords in self.tables.transferable_skills.items()
            if any(contains_term(entry_text, k) for k in keywords)
            and any(contains_term(job_text, k) for k in keywords)
        ]
        return TRANSFERABLE_SKILL_POINTS * len(shared)

    def industry_points(self, entry: ExperienceEntry, job: JobPosting) -> int:
        if not entry.company or not job.company:
            return 0
        for words in self.tables.industry_buckets.values():
            in_entry = any(contains_term(entry.company, word) for word in words)
            if in_entry and any(contains_term(job.company, word) for word in words):
                return INDUSTRY_POINTS
        return 0

    def keyword_points(self, entry: ExperienceEntry, job_keywords: FrozenSet[str]) -> int:
        entry_text = entry.combined_text
        found = [keyword for keyword in job_keywords if contains_term(entry_text, keyword)]
        return JOB_KEYWORD_POINTS * len(found)

    # =========================================================================
    # SCORING
    # =========================================================================

    def score_breakdown(
        self,
        entry: ExperienceEntry,
        job: JobPosting,
        job_keywords: Optional[FrozenSet[str]] = None,
        job_category: Optional[str] = None,
    ) -> Dict[str, int]:
        """Points per factor for one entry (before flooring)."""
        if job_keywords is None:
            job_keywords = extract_job_keywords(job, self.tables)
        if job_category is None:
            job_category = self.categorizer.categorize_job(job)
        entry_category = self.categorizer.categorize_entry(entry)

        breakdown = {
            "category": self.category_points(entry_category, job_category),
            "title_keywords": self.title_keyword_points(entry, job),
            "transferable_skills": 0,
            "industry": self.industry_points(entry, job),
            "job_keywords": self.keyword_points(entry, job_keywords),
            "recency": recency_points(entry.duration),
        }
        if entry_category != job_category:
            breakdown["transferable_skills"] = self.transferable_points(entry, job)
        return breakdown

    def score(
        self,
        entry: ExperienceEntry,
        job: JobPosting,
        job_keywords: Optional[FrozenSet[str]] = None,
    ) -> int:
        """Total relevance score for one entry, floored at 0."""
        return max(0, sum(self.score_breakdown(entry, job, job_keywords).values()))

    def rank(
        self,
        entries: Sequence[ExperienceEntry],
        job: JobPosting,
        job_keywords: Optional[FrozenSet[str]] = None,
    ) -> List[ScoredExperience]:
        """
        Score every entry and sort by score, highest first.

        The sort is stable: equal scores keep source order.
        """
        if job_keywords is None:
            job_keywords = extract_job_keywords(job, self.tables)
        job_category = self.categorizer.categorize_job(job)

        scored = []
        for index, entry in enumerate(entries):
            breakdown = self.score_breakdown(entry, job, job_keywords, job_category)
            scored.append(
                ScoredExperience(
                    entry=entry,
                    score=max(0, sum(breakdown.values())),
                    index=index,
                    breakdown=breakdown,
                )
            )
        return sorted(scored, key=lambda item: item.score, reverse=True)

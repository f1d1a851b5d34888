"""
Job categorization.

Maps free text (a job's title and description, or an experience entry's
title and company) to exactly one category label. Categories are tested in
the fixed priority order of the keyword tables; the first category with any
keyword hit wins, and "general" is the default.

The result depends only on the text and the tables: matches are whole-word
membership tests, never positions, so competing matches are resolved by
priority order alone.
"""

from typing import Optional

from resumefit.contexts.intake.job_posting import JobPosting
from resumefit.contexts.templating.resume_data_structure import ExperienceEntry
from resumefit.utils.keyword_tables import KeywordTables, default_keyword_tables
from resumefit.utils.text_processing import contains_term

DEFAULT_CATEGORY = "general"


class JobCategorizer:
    """
    Keyword-membership categorizer.

    Usage:
        categorizer = JobCategorizer()
        categorizer.categorize("Cashier at Fresh Market")  # "retail"
    """

    def __init__(self, tables: Optional[KeywordTables] = None):
        self.tables = tables or default_keyword_tables()

    def categorize(self, text: str) -> str:
        """Return the first category (in priority order) with a keyword in text."""
        for category, keywords in self.tables.categories.items():
            if any(contains_term(text, keyword) for keyword in keywords):
                return category
        return DEFAULT_CATEGORY

    def categorize_job(self, job: JobPosting) -> str:
        """Categorize a job from its title and description."""
        return self.categorize(f"{job.title} {job.description}")

    def categorize_entry(self, entry: ExperienceEntry) -> str:
        """Categorize an experience entry from its title and company."""
        return self.categorize(f"{entry.title} {entry.company}")

    def are_related(self, first: str, second: str) -> bool:
        """Whether two categories share a related group."""
        return any(
            first in members and second in members for members in self.tables.related_groups.values()
        )


def categorize_job(job: JobPosting, tables: Optional[KeywordTables] = None) -> str:
    return JobCategorizer(tables).categorize_job(job)

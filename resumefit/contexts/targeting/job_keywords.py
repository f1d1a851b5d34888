"""
Job keyword extraction.

The job keyword set drives the keyword-overlap score, competency
reordering, vocabulary rewrites and summary phrases. It holds:

- the job title itself (lowercased)
- every keyword-bank entry found in the job text
- every common keyword found in the job text

Keywords are lowercased and deduplicated; the set is unordered, so callers
that need a stable order sort it.
"""

from typing import FrozenSet, List, Optional

from resumefit.contexts.intake.job_posting import JobPosting
from resumefit.utils.keyword_tables import KeywordTables, default_keyword_tables
from resumefit.utils.text_processing import contains_term


def extract_job_keywords(job: JobPosting, tables: Optional[KeywordTables] = None) -> FrozenSet[str]:
    """
    Extract the keyword set for a job.

    Example:
        >>> job = JobPosting(title="Data Entry Clerk", description="Accuracy and filing required")
        >>> sorted(extract_job_keywords(job))
        ['accuracy', 'clerk', 'data entry', 'data entry clerk', 'filing']
    """
    tables = tables or default_keyword_tables()
    text = f"{job.title} {job.description}"

    keywords = set()
    if job.title.strip():
        keywords.add(" ".join(job.title.lower().split()))

    for keyword in tables.all_bank_keywords():
        if contains_term(text, keyword):
            keywords.add(keyword.lower())

    for keyword in tables.common_keywords:
        if contains_term(text, keyword):
            keywords.add(keyword.lower())

    return frozenset(keywords)


def sorted_keywords(keywords: FrozenSet[str]) -> List[str]:
    """Keywords in a stable order: longest first, then alphabetical."""
    return sorted(keywords, key=lambda keyword: (-len(keyword), keyword))

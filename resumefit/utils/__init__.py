"""
Shared utilities for resumefit.

Common functionality used across contexts:
- Keyword tables (versioned YAML configuration)
- Whole-word keyword matching
- Logging setup
- Timestamps
"""

from resumefit.utils.keyword_tables import (
    KeywordTables,
    default_keyword_tables,
    load_keyword_tables,
)
from resumefit.utils.text_processing import contains_term, matching_terms
from resumefit.utils.timestamp import now

__all__ = [
    "KeywordTables",
    "default_keyword_tables",
    "load_keyword_tables",
    "contains_term",
    "matching_terms",
    "now",
]

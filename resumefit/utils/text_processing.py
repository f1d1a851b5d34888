"""
Text matching utilities shared by the intake and targeting contexts.

Keyword membership throughout resumefit is whole-word and case-insensitive,
with an optional plural suffix, so "cashier" matches "Cashiers" but "pos"
never matches "position".
"""

import re
from functools import lru_cache
from typing import Iterable, List


@lru_cache(maxsize=4096)
def term_pattern(term: str) -> re.Pattern:
    """
    Compile a whole-word, case-insensitive pattern for a keyword or phrase.

    Internal whitespace in the term matches any run of whitespace.

    Example:
        >>> bool(term_pattern("customer service").search("Customer  Service rep"))
        True
        >>> bool(term_pattern("pos").search("open position"))
        False
    """
    escaped = r"\s+".join(re.escape(part) for part in term.split())
    # \b only works next to word characters ("10-key", "ph.d" end in one, "c++" does not)
    prefix = r"\b" if re.match(r"\w", term) else ""
    suffix = r"(?:s|es)?\b" if re.search(r"\w$", term) else ""
    return re.compile(prefix + escaped + suffix, re.IGNORECASE)


def contains_term(text: str, term: str) -> bool:
    """Check whether text contains term as a whole word (plural allowed)."""
    if not text or not term:
        return False
    return term_pattern(term).search(text) is not None


def matching_terms(text: str, terms: Iterable[str]) -> List[str]:
    """Return the terms found in text, in the order given, without duplicates."""
    found = []
    for term in terms:
        if term not in found and contains_term(text, term):
            found.append(term)
    return found


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def safe_filename_part(text: str) -> str:
    """Replace every non-alphanumeric character with an underscore."""
    return re.sub(r"[^a-zA-Z0-9]", "_", text)

"""
Regex patterns for extracting fields from resume lines.

Contact patterns, date-range patterns that anchor experience entries, and
bullet glyph detection. Grouped in frozen dataclasses like the header
vocabulary in section_patterns.py.
"""

import re
from dataclasses import dataclass

# =============================================================================
# CONTACT PATTERNS
# =============================================================================


@dataclass(frozen=True)
class PhonePatterns:
    """
    Phone number formats, tried in order. First match wins.

    Order matters: the international pattern would otherwise lose its
    country code to the dashed pattern.
    """

    # +1 555 123 4567, +44 20 7946 0958, +1 (555) 123-4567
    INTERNATIONAL: re.Pattern = re.compile(r"\+\d{1,3}[\s.-]?\(?\d{1,4}\)?(?:[\s.-]?\d{2,4}){2,3}")

    # (555) 123-4567
    PARENTHESIZED: re.Pattern = re.compile(r"\(\d{3}\)\s*\d{3}[\s.-]?\d{4}")

    # 555-123-4567, 555.123.4567, 555 123 4567
    DASHED: re.Pattern = re.compile(r"\b\d{3}[-.\s]\d{3}[-.\s]\d{4}\b")

    # 5551234567
    TEN_DIGIT: re.Pattern = re.compile(r"\b\d{10}\b")

    @classmethod
    def ordered(cls) -> tuple:
        return (cls.INTERNATIONAL, cls.PARENTHESIZED, cls.DASHED, cls.TEN_DIGIT)


@dataclass(frozen=True)
class ContactPatterns:
    """Email, name, location and LinkedIn patterns for the contact block."""

    EMAIL: re.Pattern = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

    # Two to four capitalized words: "Jane Doe", "Mary-Ann O'Neil", "JANE Q. DOE"
    NAME: re.Pattern = re.compile(r"^[A-Z][a-zA-Z'.\-]*(?:\s+[A-Z][a-zA-Z'.\-]*){1,3}$")

    # Any run of 7+ digits (allowing separators) reads as a phone number
    PHONE_LIKE: re.Pattern = re.compile(r"\d[\d\s().-]{5,}\d")

    # City, ST - e.g., "Seattle, WA", "San Francisco, CA"
    CITY_STATE: re.Pattern = re.compile(r"\b([A-Z][a-z]+(?: [A-Z][a-z]+)*),\s*([A-Z]{2})\b")

    LINKEDIN: re.Pattern = re.compile(
        r"(?:https?://)?(?:www\.)?linkedin\.com/in/[A-Za-z0-9_-]+", re.IGNORECASE
    )


# =============================================================================
# DATE PATTERNS
# =============================================================================

_MONTH = (
    r"\b(?:january|february|march|april|may|june|july|august|september|october|november|december"
    r"|jan|feb|mar|apr|jun|jul|aug|sept|sep|oct|nov|dec)\.?"
)
_YEAR = r"(?:19|20)\d{2}"
_DATE = rf"(?:{_MONTH}\s+|\d{{1,2}}/)?{_YEAR}"
_END = rf"(?:{_DATE}|present|current|now)"
# "--" must be tried before "-"
_SEPARATOR = r"(?:\s*(?:--|-|–|—)\s*|\s+(?:to|and)\s+)"
_RANGE = rf"{_DATE}{_SEPARATOR}{_END}"


@dataclass(frozen=True)
class DatePatterns:
    """
    Date-range patterns. A date range is the anchor for a new experience entry.

    Accepted forms: "2019 - 2022", "2019 -- Present", "Jan 2019 – Mar 2021",
    "2018 to 2020", "2016 and 2017", "05/2019 - Current".
    """

    RANGE: re.Pattern = re.compile(_RANGE, re.IGNORECASE)

    # Range closing a line: "Acme Corp, Seattle, WA 2019 -- 2022"
    TRAILING_RANGE: re.Pattern = re.compile(rf"[(\[]?\s*({_RANGE})\s*[)\]]?\s*$", re.IGNORECASE)

    # Range opening a line: "2019 - 2022  Acme Corp"
    LEADING_RANGE: re.Pattern = re.compile(rf"^\s*[(\[]?\s*({_RANGE})\s*[)\]]?", re.IGNORECASE)

    YEAR: re.Pattern = re.compile(rf"\b{_YEAR}\b")

    # A line that is nothing but a year or a range: "2015", "(2015)", "2011 - 2015"
    STANDALONE: re.Pattern = re.compile(rf"^[(\[]?\s*(?:{_RANGE}|{_YEAR})\s*[)\]]?$", re.IGNORECASE)

    # Tab followed later by a year: "Acme Corp\t2019 -- 2022"
    TAB_THEN_YEAR: re.Pattern = re.compile(rf"\t.*\b{_YEAR}\b")


# =============================================================================
# BULLETS AND SEPARATORS
# =============================================================================


@dataclass(frozen=True)
class BulletPatterns:
    """
    Bullet glyph detection.

    Round and square glyphs count with or without a following space; "-" and
    "*" need one, so "-based" style fragments are not read as bullets.
    """

    BULLET: re.Pattern = re.compile(r"^\s*(?:[•▪●◦·‣]\s*|[-*]\s+)")


# Trailing separators left on a company name after the date is split off
TRAILING_SEPARATORS = " \t,|-–—(["

# Brackets closing a parenthesized range: "Acme Corp (2019 - 2022) Seattle, WA"
RANGE_CLOSERS = ")]"

# Trailing two-letter state suffix: "Acme Corp, WA"
STATE_SUFFIX = re.compile(r",\s*([A-Z]{2})$")

# Delimiters for a skills line: comma, bullet, pipe, semicolon, middle dot, tab, spaced dash
SKILL_DELIMITERS = re.compile(r"[,•|;·\t]|\s+-\s+")

# "Technical: Excel, Word" - a short label before the skill list
SKILL_LABEL = re.compile(r"^[^:,]{1,30}:\s*")

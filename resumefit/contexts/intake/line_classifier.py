"""
Line grammar for resume text.

Every line is classified into exactly one kind:

    BLANK    empty or whitespace only
    HEADER   a section header (vocabulary match or actual section header)
    COMPANY  an experience entry anchor (tab-then-year, or a date range)
    BULLET   a line starting with a bullet glyph
    PLAIN    anything else

Checks run in that order. The company check runs before the bullet check,
so a bulleted line carrying a date range still anchors an entry.

The experience scanner consumes these classifications instead of running
its own regex cascade, so each transition can be tested on its own.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from resumefit.contexts.intake.extraction_patterns import (
    RANGE_CLOSERS,
    STATE_SUFFIX,
    TRAILING_SEPARATORS,
    BulletPatterns,
    DatePatterns,
)
from resumefit.contexts.intake.section_patterns import (
    ResumeSection,
    is_actual_section_header,
    match_section_header,
    section_for_actual_header,
)


class LineKind(Enum):
    BLANK = "blank"
    HEADER = "header"
    COMPANY = "company"
    BULLET = "bullet"
    PLAIN = "plain"


@dataclass(frozen=True)
class CompanyLine:
    """Fields split out of a company line."""

    company: str
    location: str = ""
    duration: str = ""


@dataclass(frozen=True)
class ClassifiedLine:
    """
    One classified line.

    Attributes:
        kind: Line kind
        text: Stripped line text (bullet glyph removed for BULLET lines)
        section: Section opened by a HEADER line
        inline: Content after the colon of a HEADER line ("Skills: Excel")
        company: Parsed fields of a COMPANY line
    """

    kind: LineKind
    text: str
    section: Optional[ResumeSection] = None
    inline: str = ""
    company: Optional[CompanyLine] = None


def strip_bullet(line: str) -> str:
    """Remove a leading bullet glyph and surrounding whitespace."""
    return BulletPatterns.BULLET.sub("", line, count=1).strip()


def is_bullet(line: str) -> bool:
    return bool(BulletPatterns.BULLET.match(line))


def _split_company_and_location(text: str) -> tuple:
    """
    Split "Company | Location" or "Company, City, ST" into (company, location).

    A trailing ", ST" state suffix is stripped from the company and kept in
    the location.
    """
    text = text.strip().rstrip(TRAILING_SEPARATORS).strip()

    if "|" in text:
        parts = [part.strip() for part in text.split("|") if part.strip()]
        if not parts:
            return "", ""
        return parts[0], ", ".join(parts[1:])

    state_match = STATE_SUFFIX.search(text)
    if not state_match:
        return text, ""

    state = state_match.group(1)
    remainder = text[: state_match.start()].strip()
    if "," in remainder:
        company, city = remainder.rsplit(",", 1)
        return company.strip(), f"{city.strip()}, {state}"
    return remainder, state


def parse_company_line(line: str) -> Optional[CompanyLine]:
    """
    Parse a company line into company, location and duration.

    A company line is either a tab followed later by a 4-digit year, or a
    line carrying a date range. A range in the middle of a line anchors only
    when the line is not bulleted; text after it becomes the location
    ("Acme Corp (2019 - 2022) Seattle, WA"). On a tab, the left side is the
    company and the right side holds the duration. Otherwise the date range
    is split off as the duration and the remainder is the company.

    Returns:
        CompanyLine, or None if the line is not a company line

    Example:
        >>> parse_company_line("Acme Corp\\t2019 -- 2022")
        CompanyLine(company='Acme Corp', location='', duration='2019 -- 2022')
        >>> parse_company_line("Helped customers find products") is None
        True
    """
    bulleted = is_bullet(line)
    text = strip_bullet(line) if bulleted else line.strip()

    if "\t" in text and DatePatterns.TAB_THEN_YEAR.search(text):
        left, right = text.split("\t", 1)
        company, location = _split_company_and_location(left)
        right = right.strip()
        range_match = DatePatterns.RANGE.search(right)
        if range_match:
            duration = range_match.group(0).strip()
            rest = (right[: range_match.start()] + right[range_match.end() :]).strip()
            rest = rest.strip(TRAILING_SEPARATORS).strip()
            if rest and not location:
                location = rest
        else:
            duration = right
        return CompanyLine(company=company, location=location, duration=duration)

    trailing = DatePatterns.TRAILING_RANGE.search(text)
    if trailing:
        company, location = _split_company_and_location(text[: trailing.start()])
        return CompanyLine(company=company, location=location, duration=trailing.group(1).strip())

    leading = DatePatterns.LEADING_RANGE.match(text)
    if leading:
        company, location = _split_company_and_location(
            text[leading.end() :].lstrip(TRAILING_SEPARATORS)
        )
        return CompanyLine(company=company, location=location, duration=leading.group(1).strip())

    # A bulleted sentence mentioning dates is an achievement, not an anchor
    middle = None if bulleted else DatePatterns.RANGE.search(text)
    if middle:
        company, location = _split_company_and_location(text[: middle.start()])
        tail = text[middle.end() :].lstrip(RANGE_CLOSERS + TRAILING_SEPARATORS).strip()
        if company:
            return CompanyLine(
                company=company, location=location or tail, duration=middle.group(0).strip()
            )

    return None


def classify_line(line: str) -> ClassifiedLine:
    """
    Classify a single resume line.

    Args:
        line: Raw line (may carry leading tabs and bullet glyphs)

    Returns:
        ClassifiedLine with the kind and any parsed payload

    Example:
        >>> classify_line("• Helped customers").kind
        <LineKind.BULLET: 'bullet'>
        >>> classify_line("EDUCATION").section
        <ResumeSection.EDUCATION: 'education'>
    """
    stripped = line.strip()
    if not stripped:
        return ClassifiedLine(kind=LineKind.BLANK, text="")

    header = match_section_header(stripped)
    if header:
        return ClassifiedLine(
            kind=LineKind.HEADER, text=stripped, section=header.section, inline=header.inline
        )
    if is_actual_section_header(stripped):
        return ClassifiedLine(
            kind=LineKind.HEADER, text=stripped, section=section_for_actual_header(stripped)
        )

    company = parse_company_line(line)
    if company:
        return ClassifiedLine(kind=LineKind.COMPANY, text=stripped, company=company)

    if is_bullet(stripped):
        return ClassifiedLine(kind=LineKind.BULLET, text=strip_bullet(stripped))

    return ClassifiedLine(kind=LineKind.PLAIN, text=stripped)

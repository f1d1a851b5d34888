"""
Pattern matching for resume section identification.

This module holds the header vocabulary used to split free-form resume text
into labeled sections, plus the stricter "actual section header" rule the
experience scanner uses to decide where the experience region ends.

Pattern classes follow the convention used across intake:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ResumeSection(str, Enum):
    """Labeled resume regions. Every non-empty line lands in exactly one."""

    CONTACT = "contact"
    SUMMARY = "summary"
    COMPETENCIES = "competencies"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    CERTIFICATIONS = "certifications"
    UNCLASSIFIED = "unclassified"


# =============================================================================
# HEADER VOCABULARY
# =============================================================================


@dataclass(frozen=True)
class SectionHeaderVocabulary:
    """
    Header phrases for each section, matched case-insensitively.

    A line is a header when it is exactly one of these phrases, or the phrase
    immediately followed by a colon or a connector ("Skills & Abilities",
    "Education: B.A. ..."). Headers for sections resumefit does not model
    (awards, references, ...) map to UNCLASSIFIED so their content is not
    mistaken for the section above them.
    """

    SUMMARY: tuple = (
        "professional summary",
        "summary of qualifications",
        "career summary",
        "executive summary",
        "summary",
        "professional profile",
        "profile",
        "career objective",
        "objective",
        "about me",
    )

    COMPETENCIES: tuple = (
        "core competencies",
        "competencies",
        "technical skills",
        "key skills",
        "core skills",
        "professional skills",
        "skill set",
        "skills summary",
        "skills",
        "abilities",
        "areas of expertise",
        "expertise",
    )

    EXPERIENCE: tuple = (
        "professional experience",
        "work experience",
        "relevant experience",
        "employment history",
        "employment experience",
        "work history",
        "career history",
        "employment",
        "experience",
    )

    EDUCATION: tuple = (
        "education",
        "academic background",
        "academic history",
        "academics",
    )

    CERTIFICATIONS: tuple = (
        "certifications",
        "certification",
        "certificates",
        "credentials",
        "licenses",
        "license",
        "licensure",
    )

    UNCLASSIFIED: tuple = (
        "awards",
        "honors",
        "achievements",
        "accomplishments",
        "references",
        "projects",
        "volunteer experience",
        "volunteer work",
        "volunteering",
        "interests",
        "hobbies",
        "activities",
        "publications",
        "languages",
        "memberships",
        "affiliations",
        "additional information",
    )


def _build_header_table() -> Tuple[Tuple[str, ResumeSection], ...]:
    vocabulary = SectionHeaderVocabulary()
    table = []
    for section in ResumeSection:
        if section is ResumeSection.CONTACT:
            continue
        for phrase in getattr(vocabulary, section.name):
            table.append((phrase, section))
    # Longest phrase first so "volunteer experience" wins over "experience"
    return tuple(sorted(table, key=lambda item: len(item[0]), reverse=True))


HEADER_TABLE = _build_header_table()

# Decoration some resumes put around headers: "## Skills", "**EDUCATION**", "=== Experience ==="
HEADER_DECORATION = "#*=_~ \t"

# A header phrase followed by a connector and a short tail: "Skills & Abilities",
# "Licenses and Certifications", "EDUCATION & CREDENTIALS"
HEADER_CONNECTOR = re.compile(r"^\s*(?:&|and|or|/|\||-|\+)\s+[a-z][a-z &/]{0,40}$", re.IGNORECASE)

# Header tails must stay short; longer lines are prose that happens to start with a header word
MAX_HEADER_LENGTH = 50


@dataclass(frozen=True)
class HeaderMatch:
    """
    A line recognized as a section header.

    Attributes:
        section: Section the header opens
        phrase: Vocabulary phrase that matched
        inline: Content after "Header:" on the same line (empty if none)
    """

    section: ResumeSection
    phrase: str
    inline: str = ""


def match_section_header(line: str) -> Optional[HeaderMatch]:
    """
    Match a line against the header vocabulary.

    Args:
        line: Single line of resume text

    Returns:
        HeaderMatch if the line is a header, None otherwise

    Example:
        >>> match_section_header("PROFESSIONAL EXPERIENCE").section
        <ResumeSection.EXPERIENCE: 'experience'>
        >>> match_section_header("Skills: Excel, Word").inline
        'Excel, Word'
        >>> match_section_header("Developed new skills in Excel") is None
        True
    """
    stripped = line.strip().strip(HEADER_DECORATION)
    lowered = stripped.lower()
    if not lowered:
        return None

    for phrase, section in HEADER_TABLE:
        if not lowered.startswith(phrase):
            continue
        rest = stripped[len(phrase) :]

        if not rest.strip():
            return HeaderMatch(section=section, phrase=phrase)

        if rest.startswith(":"):
            return HeaderMatch(section=section, phrase=phrase, inline=rest[1:].strip())

        if len(stripped) <= MAX_HEADER_LENGTH:
            head, colon, inline = rest.partition(":")
            if HEADER_CONNECTOR.match(head.rstrip()):
                return HeaderMatch(section=section, phrase=phrase, inline=inline.strip())

    return None


# =============================================================================
# ACTUAL SECTION HEADERS (experience region end)
# =============================================================================


@dataclass(frozen=True)
class SectionEndPatterns:
    """
    Stricter header rule that ends the experience region.

    Only lines STARTING with one of a few header words, followed by end of
    line, a colon, or a conjunction count. A sentence that merely mentions
    "skills" does not end the region.
    """

    ACTUAL_HEADER: re.Pattern = re.compile(
        r"^(?:education|skills|certifications?|awards|achievements|licenses?)"
        r"\s*(?:$|:|(?:&|and\b|or\b))",
        re.IGNORECASE,
    )


def is_actual_section_header(line: str) -> bool:
    """
    Check whether a line is a real section header that ends the experience region.

    Example:
        >>> is_actual_section_header("EDUCATION")
        True
        >>> is_actual_section_header("Skills & Abilities")
        True
        >>> is_actual_section_header("Skills gained on the job were many")
        False
    """
    return bool(SectionEndPatterns.ACTUAL_HEADER.match(line.strip().strip(HEADER_DECORATION)))


def section_for_actual_header(line: str) -> ResumeSection:
    """Section an actual section header opens (awards/achievements are unclassified)."""
    lowered = line.strip().strip(HEADER_DECORATION).lower()
    if lowered.startswith("education"):
        return ResumeSection.EDUCATION
    if lowered.startswith("skills"):
        return ResumeSection.COMPETENCIES
    if lowered.startswith(("certification", "license")):
        return ResumeSection.CERTIFICATIONS
    return ResumeSection.UNCLASSIFIED


# Experience header fallback for resumes whose experience header carries extra text
EXPERIENCE_HEADER_MARKERS = ("professional experience", "work experience", "employment history")

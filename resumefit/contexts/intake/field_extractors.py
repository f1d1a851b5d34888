"""
Heuristic field extractors for segmented resumes.

Each extractor reads its own section of a SegmentedResume and, where a
section is commonly missing, falls back to a keyword scan of the rest of
the document:

- extract_personal_info: name, email, phone, location, LinkedIn
- extract_summary: summary paragraph
- extract_education: education records (certificate lines routed away)
- extract_skills: skills list (keyword scan fallback, capped)
- extract_certifications: certifications (memberships, education and
  fabricated entries excluded)

Extractors return empty values on a miss; the parser decides what to
backfill.
"""

import re
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from resumefit.contexts.intake.extraction_patterns import (
    SKILL_DELIMITERS,
    SKILL_LABEL,
    ContactPatterns,
    DatePatterns,
    PhonePatterns,
)
from resumefit.contexts.intake.line_classifier import strip_bullet
from resumefit.contexts.intake.logger import _log_debug
from resumefit.contexts.intake.section_patterns import ResumeSection
from resumefit.contexts.intake.segmenter import SegmentedResume
from resumefit.contexts.templating.resume_data_structure import EducationEntry, PersonalInfo
from resumefit.utils.keyword_tables import KeywordTables
from resumefit.utils.text_processing import contains_term

# Fallback scans only look at lines short enough to be list items
MAX_FALLBACK_LINE_LENGTH = 120
MAX_FALLBACK_EDUCATION = 3
MAX_SKILL_LENGTH = 60
MAX_FALLBACK_CERTIFICATION_LENGTH = 80

# Certification-looking words for the document-wide fallback
CERTIFICATION_FALLBACK_WORDS = ("certified", "certification", "license", "licensed")


# =============================================================================
# PERSONAL INFO
# =============================================================================


def find_phone(text: str) -> Optional[str]:
    """First phone number in text, trying each format in order."""
    for pattern in PhonePatterns.ordered():
        match = pattern.search(text)
        if match:
            return match.group(0).strip()
    return None


def find_email(text: str) -> Optional[str]:
    match = ContactPatterns.EMAIL.search(text)
    return match.group(0) if match else None


def looks_like_name(line: str) -> bool:
    """No "@", no phone-like digit run, two to four capitalized words."""
    line = line.strip()
    if "@" in line or ContactPatterns.PHONE_LIKE.search(line):
        return False
    return bool(ContactPatterns.NAME.match(line))


def extract_personal_info(segmented: SegmentedResume) -> PersonalInfo:
    """
    Extract contact details.

    The contact block is searched first; phone and email fall back to the
    whole document. Fields that are not found stay None.
    """
    contact_lines = segmented.section_lines(ResumeSection.CONTACT)
    contact_text = "\n".join(contact_lines)
    full_text = segmented.text

    name = next((line.strip() for line in contact_lines if looks_like_name(line)), None)
    phone = find_phone(contact_text) or find_phone(full_text)
    email = find_email(contact_text) or find_email(full_text)

    location = None
    for line in contact_lines:
        if "@" in line:
            continue
        match = ContactPatterns.CITY_STATE.search(line)
        if match:
            location = f"{match.group(1)}, {match.group(2)}"
            break

    linkedin_match = ContactPatterns.LINKEDIN.search(contact_text) or ContactPatterns.LINKEDIN.search(
        full_text
    )
    linkedin = linkedin_match.group(0) if linkedin_match else None

    return PersonalInfo(name=name, email=email, phone=phone, location=location, linkedin=linkedin)


# =============================================================================
# SUMMARY
# =============================================================================


def extract_summary(segmented: SegmentedResume) -> str:
    """Summary section joined into one paragraph (empty if there is none)."""
    lines = [strip_bullet(line) for line in segmented.section_lines(ResumeSection.SUMMARY)]
    return " ".join(line for line in lines if line)


# =============================================================================
# EDUCATION
# =============================================================================


def is_education_record(line: str, tables: KeywordTables) -> bool:
    """
    An education keyword present and no professional-certification phrase.

    Example:
        "Bachelor of Arts, State University"  -> True
        "Certified Scrum Master"              -> False
        "Certificate in Accounting, Bellevue College" -> True (college)
    """
    if not any(contains_term(line, keyword) for keyword in tables.education_keywords):
        return False
    return not any(contains_term(line, phrase) for phrase in tables.professional_certification_phrases)


def is_certificate_line(line: str, tables: KeywordTables) -> bool:
    return any(contains_term(line, marker) for marker in tables.certificate_markers)


def _split_record(line: str) -> List[str]:
    if "|" in line:
        parts = line.split("|")
    elif "\t" in line:
        parts = line.split("\t")
    else:
        parts = line.split(",")
    return [part.strip() for part in parts if part.strip()]


def parse_education_line(line: str, tables: KeywordTables) -> EducationEntry:
    """
    Split one education record into degree, school, location and year.

    Fields are separated by "|", tabs, or commas. The year is a date range if
    present, else the last 4-digit year on the line.

    Example:
        "Bachelor of Arts, State University, 2015"
            -> degree="Bachelor of Arts", school="State University", year="2015"
    """
    line = strip_bullet(line)
    range_match = DatePatterns.RANGE.search(line)
    if range_match:
        year = range_match.group(0).strip()
    else:
        years = DatePatterns.YEAR.findall(line)
        year = years[-1] if years else ""

    parts = []
    for part in _split_record(line):
        if year and year in part:
            part = part.replace(year, "").strip(" ()[]-–—")
        if part:
            parts.append(part)

    degree = next((p for p in parts if any(contains_term(p, k) for k in tables.degree_keywords)), "")
    school = next(
        (p for p in parts if p != degree and any(contains_term(p, k) for k in tables.school_keywords)),
        "",
    )
    if not degree and not school and parts:
        degree = parts[0]

    location = ", ".join(p for p in parts if p not in (degree, school))
    return EducationEntry(degree=degree, school=school, location=location, year=year)


def _merge_education(entries: List[EducationEntry], entry: EducationEntry) -> bool:
    """Merge a degree-only or school-only line into the previous entry. Returns True if merged."""
    if not entries:
        return False
    previous = entries[-1]
    if entry.school and not entry.degree and previous.degree and not previous.school:
        entries[-1] = replace(
            previous,
            school=entry.school,
            location=previous.location or entry.location,
            year=previous.year or entry.year,
        )
        return True
    if entry.degree and not entry.school and previous.school and not previous.degree:
        entries[-1] = replace(
            previous,
            degree=entry.degree,
            location=previous.location or entry.location,
            year=previous.year or entry.year,
        )
        return True
    return False


@dataclass(frozen=True)
class EducationResult:
    """Education records plus certificate lines found under the education header."""

    entries: Tuple[EducationEntry, ...] = ()
    routed_certifications: Tuple[str, ...] = ()


def extract_education(segmented: SegmentedResume, tables: KeywordTables) -> EducationResult:
    """
    Extract education records.

    Inside the education section, a line is a record if it carries an
    education keyword and no professional-certification phrase. Certificate
    lines without an education keyword are routed to certifications. Split
    records are merged: a school line after a degree-only line joins it, and
    a standalone year or "City, ST" line fills the previous entry.

    Without an education section, lines outside experience are scanned for
    degree keywords (at most 3 records).
    """
    entries: List[EducationEntry] = []
    routed: List[str] = []

    for raw in segmented.section_lines(ResumeSection.EDUCATION):
        line = strip_bullet(raw)
        if is_education_record(line, tables):
            entry = parse_education_line(line, tables)
            if not _merge_education(entries, entry):
                entries.append(entry)
        elif is_certificate_line(line, tables):
            routed.append(line)
        elif entries and DatePatterns.STANDALONE.match(line) and not entries[-1].year:
            entries[-1] = replace(entries[-1], year=line.strip("()[] "))
        elif entries and ContactPatterns.CITY_STATE.fullmatch(line) and not entries[-1].location:
            entries[-1] = replace(entries[-1], location=line)

    if not entries and not segmented.has_section(ResumeSection.EDUCATION):
        for line in segmented.lines_outside(ResumeSection.EXPERIENCE, ResumeSection.CERTIFICATIONS):
            line = strip_bullet(line)
            if len(line) > MAX_FALLBACK_LINE_LENGTH:
                continue
            has_degree = any(contains_term(line, k) for k in tables.degree_keywords)
            if has_degree and is_education_record(line, tables):
                entries.append(parse_education_line(line, tables))
            if len(entries) >= MAX_FALLBACK_EDUCATION:
                break
        if entries:
            _log_debug(f"Education fallback scan found {len(entries)} records")

    return EducationResult(entries=tuple(entries), routed_certifications=tuple(routed))


# =============================================================================
# SKILLS
# =============================================================================


def split_skill_line(line: str) -> List[str]:
    """
    Split one skills line into items.

    A short "Label:" prefix is dropped, then the line is split on commas,
    bullets, pipes, semicolons, tabs and spaced dashes.

    Example:
        >>> split_skill_line("Software: Excel, Word | Outlook")
        ['Excel', 'Word', 'Outlook']
    """
    line = SKILL_LABEL.sub("", strip_bullet(line), count=1)
    items = []
    for item in SKILL_DELIMITERS.split(line):
        item = strip_bullet(item).strip(" .")
        if item and len(item) <= MAX_SKILL_LENGTH and not re.fullmatch(r"[\d\s%.+-]+", item):
            items.append(item)
    return items


def _dedupe(items: List[str]) -> List[str]:
    seen = set()
    unique = []
    for item in items:
        key = item.casefold()
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return unique


def extract_skills(segmented: SegmentedResume, tables: KeywordTables) -> Tuple[str, ...]:
    """
    Extract skills in source order.

    Uses the competencies/skills section when it yields anything; otherwise
    scans the whole document for known skill keywords and special phrases,
    capped at max_fallback_skills.
    """
    skills = []
    for line in segmented.section_lines(ResumeSection.COMPETENCIES):
        skills.extend(split_skill_line(line))
    skills = _dedupe(skills)
    if skills:
        return tuple(skills)

    text = segmented.text
    found = [skill for skill in tables.skill_keywords if contains_term(text, skill)]
    found.extend(label for phrase, label in tables.skill_phrases.items() if contains_term(text, phrase))
    found = _dedupe(found)[: tables.max_fallback_skills]
    if found:
        _log_debug(f"Skill fallback scan found {len(found)} skills")
    return tuple(found)


# =============================================================================
# CERTIFICATIONS
# =============================================================================


def _is_kept_certification(line: str, tables: KeywordTables) -> bool:
    if any(contains_term(line, marker) for marker in tables.membership_markers):
        return False
    if is_education_record(line, tables):
        return False
    return not tables.is_fabricated_certification(line)


def extract_certifications(
    segmented: SegmentedResume,
    tables: KeywordTables,
    routed: Tuple[str, ...] = (),
) -> Tuple[str, ...]:
    """
    Extract certifications.

    Collects the certifications section, excluding membership lines,
    education records and fabricated entries, then adds certificate lines
    routed from the education section. Without either, short lines outside
    experience that mention a certification or license are used.
    """
    candidates = [strip_bullet(line) for line in segmented.section_lines(ResumeSection.CERTIFICATIONS)]
    candidates.extend(routed)
    certifications = _dedupe([line for line in candidates if line and _is_kept_certification(line, tables)])

    if not certifications and not candidates:
        fallback = []
        for line in segmented.lines_outside(
            ResumeSection.EXPERIENCE, ResumeSection.SUMMARY, ResumeSection.EDUCATION
        ):
            line = strip_bullet(line)
            if len(line) > MAX_FALLBACK_CERTIFICATION_LENGTH:
                continue
            if any(contains_term(line, word) for word in CERTIFICATION_FALLBACK_WORDS):
                if _is_kept_certification(line, tables):
                    fallback.append(line)
        certifications = _dedupe(fallback)
        if certifications:
            _log_debug(f"Certification fallback scan found {len(certifications)} lines")

    return tuple(certifications)

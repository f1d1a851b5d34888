"""
Experience entry parser (finite-state scanner).

Walks the lines after the experience header and emits ExperienceEntry
values. Lines are classified once by line_classifier.classify_line(); the
scanner only decides transitions:

    BEFORE_EXPERIENCE       --experience header-->      SEEKING_ENTRY
    SEEKING_ENTRY           --company line-->           AWAITING_TITLE
    AWAITING_TITLE          --short plain line-->       COLLECTING_ACHIEVEMENTS
    AWAITING_TITLE          --company line-->           emit, AWAITING_TITLE
    COLLECTING_ACHIEVEMENTS --company line-->           emit, AWAITING_TITLE
    any entry state         --section header-->         emit, DONE
                                                        (SEEKING_ENTRY for another experience header)

A company line is the sole anchor for a new entry. Achievements are always
verbatim lines from between an entry's company line and the next boundary;
the only synthesized text is the single fallback sentence that states the
role was held.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from resumefit.contexts.intake.line_classifier import (
    ClassifiedLine,
    CompanyLine,
    LineKind,
    classify_line,
)
from resumefit.contexts.intake.logger import _log_debug, _log_info
from resumefit.contexts.intake.section_patterns import (
    EXPERIENCE_HEADER_MARKERS,
    ResumeSection,
    is_actual_section_header,
)
from resumefit.contexts.templating.resume_data_structure import ExperienceEntry
from resumefit.utils.keyword_tables import KeywordTables, default_keyword_tables
from resumefit.utils.text_processing import contains_term

# Titles are shorter than this; longer lines are descriptions
TITLE_MAX_LENGTH = 80

# Non-bulleted lines must be longer than this to count as achievements
ACHIEVEMENT_MIN_LENGTH = 30


class ScannerState(Enum):
    BEFORE_EXPERIENCE = "before_experience"
    SEEKING_ENTRY = "seeking_entry"
    AWAITING_TITLE = "awaiting_title"
    COLLECTING_ACHIEVEMENTS = "collecting_achievements"
    DONE = "done"


@dataclass
class _PendingEntry:
    """Entry under construction; frozen into an ExperienceEntry on emit."""

    anchor: CompanyLine
    title: Optional[str] = None
    # Bullets and long lines skipped while looking for the title
    skipped: List[str] = field(default_factory=list)
    achievements: List[str] = field(default_factory=list)


def default_title_for(company: str, tables: KeywordTables) -> str:
    """
    Title to use when an entry has no recognizable title line.

    The first default-title keyword found in the company name wins, else the
    generic title.

    Example:
        >>> default_title_for("First National Bank", default_keyword_tables())
        'Bank Teller'
    """
    for keyword, title in tables.default_titles:
        if contains_term(company, keyword):
            return title
    return tables.generic_title


def fallback_achievement(title: str, company: str, tables: KeywordTables) -> str:
    """The single sentence used when an entry has no achievements. Claims nothing."""
    if company:
        return tables.fallback_achievement.format(title=title, company=company)
    return tables.fallback_achievement_no_company.format(title=title)


def is_achievement_line(line: ClassifiedLine) -> bool:
    """Bullets always count; plain lines only when longer than ACHIEVEMENT_MIN_LENGTH."""
    if line.kind is LineKind.BULLET:
        return bool(line.text)
    return line.kind is LineKind.PLAIN and len(line.text) > ACHIEVEMENT_MIN_LENGTH


def is_experience_header(line: ClassifiedLine) -> bool:
    return line.kind is LineKind.HEADER and line.section is ResumeSection.EXPERIENCE


def ends_experience(line: ClassifiedLine) -> bool:
    """
    A header for any other section, or an actual section header, ends the region.

    The scanner treats a vocabulary header carrying inline content ("Projects: ...")
    as a plain line unless it is also an actual section header.
    """
    if line.kind is not LineKind.HEADER:
        return False
    return line.section is not ResumeSection.EXPERIENCE or is_actual_section_header(line.text)


def find_experience_start(classified: Sequence[ClassifiedLine]) -> Optional[int]:
    """
    Index of the experience header line, or None.

    Vocabulary headers win; a line merely containing an experience marker
    ("PROFESSIONAL EXPERIENCE (10+ years)") is the fallback.
    """
    for index, line in enumerate(classified):
        if is_experience_header(line):
            return index
    for index, line in enumerate(classified):
        if line.kind is LineKind.BLANK:
            continue
        lowered = line.text.lower()
        if len(lowered) < TITLE_MAX_LENGTH and any(m in lowered for m in EXPERIENCE_HEADER_MARKERS):
            return index
    return None


class ExperienceScanner:
    """
    Finite-state scanner over classified resume lines.

    Usage:
        scanner = ExperienceScanner(tables)
        entries = scanner.scan(lines)
    """

    def __init__(self, tables: Optional[KeywordTables] = None):
        self.tables = tables or default_keyword_tables()
        self._entries: List[ExperienceEntry] = []
        self._pending: Optional[_PendingEntry] = None

    def scan(self, lines: Sequence[str]) -> Tuple[ExperienceEntry, ...]:
        """
        Scan resume lines and return experience entries in source order.

        Returns an empty tuple if no experience header exists.
        """
        classified = [classify_line(line) for line in lines]
        start = find_experience_start(classified)
        if start is None:
            _log_info("No experience header found")
            return ()

        self._entries = []
        self._pending = None
        state = ScannerState.BEFORE_EXPERIENCE

        for line in classified[start:]:
            state = self._step(state, line)
            if state is ScannerState.DONE:
                break

        self._emit()
        _log_debug(f"Experience scanner emitted {len(self._entries)} entries")
        return tuple(self._entries)

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def _step(self, state: ScannerState, line: ClassifiedLine) -> ScannerState:
        if state is ScannerState.BEFORE_EXPERIENCE:
            # The experience header itself
            return ScannerState.SEEKING_ENTRY

        if line.kind is LineKind.BLANK:
            return state

        if line.kind is LineKind.HEADER and line.inline and not is_actual_section_header(line.text):
            # "Projects: Led rollout of ..." is entry content, not a boundary
            line = ClassifiedLine(kind=LineKind.PLAIN, text=line.text)

        if line.kind is LineKind.HEADER:
            self._emit()
            if ends_experience(line):
                return ScannerState.DONE
            return ScannerState.SEEKING_ENTRY

        if line.kind is LineKind.COMPANY:
            self._emit()
            self._pending = _PendingEntry(anchor=line.company)
            return ScannerState.AWAITING_TITLE

        if state is ScannerState.AWAITING_TITLE:
            return self._await_title(line)

        if state is ScannerState.COLLECTING_ACHIEVEMENTS:
            if is_achievement_line(line):
                self._pending.achievements.append(line.text)
            return state

        # SEEKING_ENTRY: text before the first company line belongs to no entry
        return state

    def _await_title(self, line: ClassifiedLine) -> ScannerState:
        if line.kind is LineKind.PLAIN and len(line.text) < TITLE_MAX_LENGTH:
            self._pending.title = line.text
            self._pending.skipped.clear()
            return ScannerState.COLLECTING_ACHIEVEMENTS

        if is_achievement_line(line):
            self._pending.skipped.append(line.text)
        return ScannerState.AWAITING_TITLE

    def _emit(self) -> None:
        pending = self._pending
        if pending is None:
            return
        self._pending = None

        company = pending.anchor.company
        title = pending.title or default_title_for(company, self.tables)
        # Without a title, collection started right after the company line
        achievements = pending.achievements if pending.title else pending.skipped
        if not achievements:
            achievements = [fallback_achievement(title, company, self.tables)]
            _log_debug(f"No achievements for '{title}' at '{company}', using fallback sentence")

        self._entries.append(
            ExperienceEntry(
                title=title,
                company=company,
                location=pending.anchor.location,
                duration=pending.anchor.duration,
                achievements=tuple(achievements),
            )
        )


def parse_experience(
    lines: Sequence[str], tables: Optional[KeywordTables] = None
) -> Tuple[ExperienceEntry, ...]:
    """
    Parse experience entries from resume lines.

    Args:
        lines: Normalized resume lines (whole document)
        tables: Keyword tables (defaults to the packaged tables)

    Returns:
        Entries in source order; empty if the experience header is never found
    """
    return ExperienceScanner(tables).scan(lines)

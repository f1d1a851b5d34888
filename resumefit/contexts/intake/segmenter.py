"""
Section segmentation for free-form resume text.

Splits normalized resume text into blank-line-delimited blocks and walks
them line by line against the header vocabulary. A header line switches the
current section; every other non-empty line is assigned to the current
section. Lines before the first header belong to the contact block.

Segmentation is total: every non-empty line is assigned to exactly one
section. Lines under headers resumefit does not model (awards, references,
...) are assigned to UNCLASSIFIED, which extractors ignore.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from resumefit.contexts.intake.logger import _log_debug
from resumefit.contexts.intake.section_patterns import ResumeSection, match_section_header


@dataclass(frozen=True)
class LineAssignment:
    """
    Section assignment for one non-empty source line.

    Attributes:
        index: Line index in the normalized text
        section: Section the line belongs to
        is_header: Whether the line is the header that opened the section
    """

    index: int
    section: ResumeSection
    is_header: bool = False


@dataclass(frozen=True)
class SegmentedResume:
    """
    Resume text split into labeled sections.

    Attributes:
        lines: All lines of the normalized text
        assignments: One assignment per non-empty line, in source order
        sections: Content lines per section, with "" between blocks
            (header lines excluded, inline header content included)
    """

    lines: Tuple[str, ...]
    assignments: Tuple[LineAssignment, ...]
    sections: Dict[ResumeSection, Tuple[str, ...]] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def has_section(self, section: ResumeSection) -> bool:
        """Whether a header for the section was seen (content may still be empty)."""
        return any(a.section is section and a.is_header for a in self.assignments)

    def section_lines(self, section: ResumeSection) -> List[str]:
        """Non-empty content lines of a section, in source order."""
        return [line for line in self.sections.get(section, ()) if line.strip()]

    def section_blocks(self, section: ResumeSection) -> List[List[str]]:
        """Content lines of a section grouped into blank-line-delimited blocks."""
        blocks: List[List[str]] = []
        current: List[str] = []
        for line in self.sections.get(section, ()):
            if line.strip():
                current.append(line)
            elif current:
                blocks.append(current)
                current = []
        if current:
            blocks.append(current)
        return blocks

    def lines_outside(self, *excluded: ResumeSection) -> List[str]:
        """Non-header lines of every section except the excluded ones (and UNCLASSIFIED)."""
        skip = set(excluded) | {ResumeSection.UNCLASSIFIED}
        return [
            self.lines[a.index].strip()
            for a in self.assignments
            if not a.is_header and a.section not in skip
        ]


def split_blocks(lines: List[str]) -> List[List[Tuple[int, str]]]:
    """Group (index, line) pairs into blank-line-delimited blocks."""
    blocks: List[List[Tuple[int, str]]] = []
    current: List[Tuple[int, str]] = []
    for index, line in enumerate(lines):
        if line.strip():
            current.append((index, line))
        elif current:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


def segment_resume(text: str) -> SegmentedResume:
    """
    Segment normalized resume text into sections.

    Args:
        text: Newline-normalized resume text

    Returns:
        SegmentedResume covering every non-empty line

    Example:
        >>> seg = segment_resume("Jane Doe\\n\\nEDUCATION\\nB.A., State University")
        >>> seg.section_lines(ResumeSection.EDUCATION)
        ['B.A., State University']
    """
    lines = text.split("\n")
    assignments: List[LineAssignment] = []
    sections: Dict[ResumeSection, List[str]] = {section: [] for section in ResumeSection}
    current = ResumeSection.CONTACT

    def add_content(content: str, new_block: bool) -> None:
        if new_block and sections[current]:
            sections[current].append("")
        sections[current].append(content)

    for block in split_blocks(lines):
        new_block = True
        for index, line in block:
            header = match_section_header(line)
            if header:
                current = header.section
                assignments.append(LineAssignment(index=index, section=current, is_header=True))
                new_block = True
                if header.inline:
                    add_content(header.inline, new_block)
                    new_block = False
                continue

            assignments.append(LineAssignment(index=index, section=current))
            add_content(line, new_block)
            new_block = False

    counts = {s.value: len([line for line in v if line]) for s, v in sections.items() if v}
    _log_debug(f"Segmented {len(assignments)} lines: {counts}")

    return SegmentedResume(
        lines=tuple(lines),
        assignments=tuple(assignments),
        sections={section: tuple(content) for section, content in sections.items()},
    )

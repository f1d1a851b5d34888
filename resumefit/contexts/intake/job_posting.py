"""
Job posting data structure for the Intake context.

Provides JobPosting, the read-only job input the Targeting context tailors
against. Postings come from a job-search step as dicts, or from markdown
job notes on disk.

Factory methods:
    from_dict(data) - Build from a scraped/API dict ("description" or "summary")
    from_text(text) - Parse markdown job notes
    from_file(path) - Load markdown job notes from disk
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from resumefit.contexts.intake.exceptions import InvalidJobPostingError

# Bold metadata - e.g., **Company:** Acme Corp
BOLD_FIELD = re.compile(r"^\s*\*\*([^*]+?):\*\*\s*(.+?)\s*$", re.MULTILINE)

# Leading markdown heading - e.g., "# Data Entry Clerk"
HEADING = re.compile(r"^\s*#{1,4}\s+(.+?)\s*$", re.MULTILINE)

TITLE_FIELDS = ("role", "title", "position", "job title")


@dataclass(frozen=True)
class JobPosting:
    """
    A target job. Treated as read-only.

    Attributes:
        title: Job title (required)
        company: Hiring company
        location: Job location
        description: Free-text description (or summary)
    """

    title: str
    company: str = ""
    location: str = ""
    description: str = ""

    @property
    def combined_text(self) -> str:
        """Title and description as one lowercase string for keyword matching."""
        return f"{self.title} {self.description}".lower()

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JobPosting":
        """
        Build a JobPosting from a dict.

        Accepts either "description" or "summary" for the free text.

        Raises:
            InvalidJobPostingError: If data is not a mapping or has no usable title
        """
        if not isinstance(data, Mapping):
            raise InvalidJobPostingError(f"Job posting must be a mapping, got {type(data).__name__}")

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise InvalidJobPostingError("Job posting has no title")

        description = data.get("description") or data.get("summary") or ""
        return cls(
            title=title.strip(),
            company=str(data.get("company") or "").strip(),
            location=str(data.get("location") or "").strip(),
            description=str(description),
        )

    @classmethod
    def from_text(cls, text: str) -> "JobPosting":
        """
        Parse markdown job notes.

        The title comes from a **Role:** (or **Title:**/**Position:**) field,
        falling back to the first markdown heading. **Company:** and
        **Location:** fields fill the rest. The whole text is the description.

        Raises:
            InvalidJobPostingError: If no title can be found
        """
        fields: Dict[str, str] = {}
        for match in BOLD_FIELD.finditer(text):
            fields.setdefault(match.group(1).strip().lower(), match.group(2).strip())

        title = next((fields[name] for name in TITLE_FIELDS if fields.get(name)), "")
        if not title:
            heading = HEADING.search(text)
            title = heading.group(1).strip().strip("*") if heading else ""

        return cls.from_dict(
            {
                "title": title,
                "company": fields.get("company", ""),
                "location": fields.get("location", ""),
                "description": text,
            }
        )

    @classmethod
    def from_file(cls, file_path: Path) -> "JobPosting":
        """Load markdown job notes from disk."""
        file_path = Path(file_path)
        return cls.from_text(file_path.read_text(encoding="utf-8"))

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "description": self.description,
        }

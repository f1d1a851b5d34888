"""
Plain-text resume rendering.

Renders a ResumeDocument into ATS-friendly text with a fixed section order:

    <contact block>

    PROFESSIONAL SUMMARY
    ...

    CORE COMPETENCIES
    • ...

    PROFESSIONAL EXPERIENCE
    Company | Location<TAB>Duration
    Title
    • ...

    EDUCATION & CREDENTIALS
    Degree | School | Location | Year
    Certifications:
    • ...

Each experience entry leads with its company line and follows with its
title, the same layout the intake parser reads, so rendered text re-parses
into the same structure. Downstream export and rewrite collaborators split
the text on these headings.
"""

from typing import Dict, List, Optional

from jinja2 import TemplateError

from resumefit.contexts.templating.exceptions import TemplateRenderError
from resumefit.contexts.templating.logger import _log_debug
from resumefit.contexts.templating.registries import TemplateRegistry
from resumefit.contexts.templating.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
)

RESUME_TEMPLATE = "resume"
BULLET = "•"
FIELD_SEPARATOR = " | "
DURATION_SEPARATOR = "\t"

SECTION_HEADINGS = (
    "PROFESSIONAL SUMMARY",
    "CORE COMPETENCIES",
    "PROFESSIONAL EXPERIENCE",
    "EDUCATION & CREDENTIALS",
)

_default_registry: Optional[TemplateRegistry] = None


def _get_registry() -> TemplateRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = TemplateRegistry()
    return _default_registry


def _join_fields(*values: Optional[str]) -> str:
    return FIELD_SEPARATOR.join(value.strip() for value in values if value and value.strip())


def format_contact_lines(info: PersonalInfo) -> List[str]:
    """Contact lines below the name: "email | phone" then "location | linkedin"."""
    lines = [_join_fields(info.email, info.phone), _join_fields(info.location, info.linkedin)]
    return [line for line in lines if line]


def format_experience_header(entry: ExperienceEntry) -> str:
    """
    Company line for an entry: "Company | Location<TAB>Duration".

    The tab before the duration anchors the line on re-parse even when the
    duration is a single year.
    """
    header = _join_fields(entry.company, entry.location)
    duration = entry.duration.strip()
    if not duration:
        return header
    return f"{header}{DURATION_SEPARATOR}{duration}" if header else duration


def format_education_line(entry: EducationEntry) -> str:
    """Single education line: "Degree | School | Location | Year"."""
    return _join_fields(entry.degree, entry.school, entry.location, entry.year)


def build_render_context(resume: ResumeDocument) -> Dict[str, object]:
    """
    Flatten a ResumeDocument into the string-only context the template expects.

    None never reaches the template; unset fields become empty strings or
    are dropped from their line.
    """
    return {
        "bullet": BULLET,
        "name": (resume.personal_info.name or "").strip(),
        "contact_lines": format_contact_lines(resume.personal_info),
        "summary": resume.professional_summary.strip(),
        "competencies": [item.strip() for item in resume.core_competencies if item.strip()],
        "experience": [
            {
                "header": format_experience_header(entry),
                "title": entry.title.strip(),
                "achievements": [item.strip() for item in entry.achievements if item.strip()],
            }
            for entry in resume.experience
        ],
        "education_lines": [
            line for line in (format_education_line(entry) for entry in resume.education) if line
        ],
        "certifications": [item.strip() for item in resume.certifications if item.strip()],
    }


def render_resume_text(resume: ResumeDocument, registry: Optional[TemplateRegistry] = None) -> str:
    """
    Render a resume as deterministic plain text.

    Args:
        resume: Document to render
        registry: Template registry (defaults to the packaged templates)

    Returns:
        Rendered text ending with a single newline

    Raises:
        TemplateRenderError: If the template is missing or fails to render
    """
    registry = registry or _get_registry()

    try:
        template = registry.get_template(RESUME_TEMPLATE)
        text = template.render(**build_render_context(resume))
    except TemplateError as e:
        raise TemplateRenderError(
            "Failed to render resume text", template_name=RESUME_TEMPLATE, original_error=e
        ) from e

    _log_debug(
        f"Rendered resume for {resume.personal_info.name or 'unnamed candidate'} "
        f"({len(resume.experience)} experience entries, {text.count(chr(10))} lines)"
    )
    return text

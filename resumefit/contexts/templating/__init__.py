"""
Templating Context

Responsibilities:
- Defines the structured resume representation shared by every context
- Provides the default resume template used for backfilling and fallbacks
- Renders resumes as deterministic, ATS-friendly plain text
- Saves rendered resumes to disk

Owns: Resume structure representation, default template, text rendering
Never: Makes content prioritization decisions
"""

from resumefit.contexts.templating.defaults import get_default_resume
from resumefit.contexts.templating.exceptions import (
    InvalidResumeStructureError,
    TemplateRenderError,
)
from resumefit.contexts.templating.output import save_tailored_resume
from resumefit.contexts.templating.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ResumeDocument,
)
from resumefit.contexts.templating.text_renderer import render_resume_text

__all__ = [
    # Data structure classes
    "ResumeDocument",
    "PersonalInfo",
    "ExperienceEntry",
    "EducationEntry",
    # Defaults
    "get_default_resume",
    # Rendering and output
    "render_resume_text",
    "save_tailored_resume",
    # Exceptions
    "TemplateRenderError",
    "InvalidResumeStructureError",
]

"""
Resume parser for the Intake context.

Turns free-form resume text into a ResumeDocument:

    raw text → normalize → segment → extractors → backfill from defaults

The outcome is an explicit variant:

- Parsed(document, missing_fields): every extractor ran cleanly. Fields the
  resume did not contain were backfilled from the default template and are
  listed in missing_fields.
- Fallback(document, reasons): the input was empty or not text, an
  extractor failed, or the default template could not be loaded. The
  document holds whatever was extracted plus whatever the template supplied,
  and reasons says why it is degraded.

parse_resume() returns just the document and never raises.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, TypeVar, Union

from resumefit.contexts.intake.experience_parser import parse_experience
from resumefit.contexts.intake.field_extractors import (
    EducationResult,
    extract_certifications,
    extract_education,
    extract_personal_info,
    extract_skills,
    extract_summary,
)
from resumefit.contexts.intake.logger import _log_debug, _log_error, _log_info, _log_warning
from resumefit.contexts.intake.normalizer import normalize_resume_text
from resumefit.contexts.intake.segmenter import segment_resume
from resumefit.contexts.templating.defaults import get_default_resume
from resumefit.contexts.templating.resume_data_structure import PersonalInfo, ResumeDocument
from resumefit.utils.keyword_tables import KeywordTables, default_keyword_tables

EMPTY_INPUT_REASON = "empty input"

T = TypeVar("T")


@dataclass(frozen=True)
class Parsed:
    """Clean parse. missing_fields lists what was backfilled from defaults."""

    document: ResumeDocument
    missing_fields: Tuple[str, ...] = ()

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class Fallback:
    """Degraded parse. The document is usable; reasons explain what went wrong."""

    document: ResumeDocument
    reasons: Tuple[str, ...]

    @property
    def is_fallback(self) -> bool:
        return True


ParseOutcome = Union[Parsed, Fallback]


def _load_defaults(reasons: List[str]) -> ResumeDocument:
    """Default template, or an empty document if the template cannot be loaded."""
    try:
        return get_default_resume()
    except Exception as e:
        reasons.append(f"default template: {type(e).__name__}: {e}")
        _log_error(f"Default resume template could not be loaded: {e}")
        return ResumeDocument()


def _run_extractor(name: str, extractor: Callable[[], T], empty: T, reasons: List[str]) -> T:
    """Run one extractor; a failure is recorded and the empty value used instead."""
    try:
        return extractor()
    except Exception as e:
        reasons.append(f"{name}: {type(e).__name__}: {e}")
        _log_warning(f"Extractor '{name}' failed, continuing without it: {e}")
        return empty


def parse_resume_outcome(
    raw_text: object,
    tables: Optional[KeywordTables] = None,
    defaults: Optional[ResumeDocument] = None,
) -> ParseOutcome:
    """
    Parse resume text and report whether the parse was clean.

    Args:
        raw_text: Resume text. Anything that is not a non-blank string yields
                  Fallback(default template, "empty input").
        tables: Keyword tables (defaults to the packaged tables)
        defaults: Default template for backfilling (defaults to get_default_resume()).
                  If the default template cannot be loaded, an empty document
                  is used and the outcome is a Fallback.

    Returns:
        Parsed or Fallback
    """
    reasons: List[str] = []
    if defaults is None:
        defaults = _load_defaults(reasons)

    if not isinstance(raw_text, str) or not raw_text.strip():
        _log_warning("Resume text is empty or not a string, using default template")
        return Fallback(document=defaults, reasons=(EMPTY_INPUT_REASON, *reasons))

    tables = tables or default_keyword_tables()

    segmented = _run_extractor(
        "segmentation", lambda: segment_resume(normalize_resume_text(raw_text)), None, reasons
    )
    if segmented is None:
        return Fallback(document=defaults, reasons=tuple(reasons))

    personal_info = _run_extractor(
        "personal_info", lambda: extract_personal_info(segmented), PersonalInfo(), reasons
    )
    summary = _run_extractor("summary", lambda: extract_summary(segmented), "", reasons)
    experience = _run_extractor(
        "experience", lambda: parse_experience(segmented.lines, tables), (), reasons
    )
    education = _run_extractor(
        "education", lambda: extract_education(segmented, tables), EducationResult(), reasons
    )
    skills = _run_extractor("skills", lambda: extract_skills(segmented, tables), (), reasons)
    certifications = _run_extractor(
        "certifications",
        lambda: extract_certifications(segmented, tables, education.routed_certifications),
        (),
        reasons,
    )

    extracted = ResumeDocument(
        personal_info=personal_info,
        professional_summary=summary,
        core_competencies=skills,
        experience=experience,
        education=education.entries,
        certifications=certifications,
    )
    missing = tuple(f"personal_info.{name}" for name in personal_info.missing_fields())
    missing += extracted.missing_fields()
    document = extracted.backfilled_from(defaults)

    _log_debug(
        f"Parsed resume: {len(experience)} experience, {len(education.entries)} education, "
        f"{len(skills)} skills, {len(certifications)} certifications"
    )
    if missing:
        _log_info(f"Backfilled from default template: {', '.join(missing)}")

    if reasons:
        return Fallback(document=document, reasons=tuple(reasons))
    return Parsed(document=document, missing_fields=missing)


def parse_resume(
    raw_text: object,
    tables: Optional[KeywordTables] = None,
    defaults: Optional[ResumeDocument] = None,
) -> ResumeDocument:
    """
    Parse resume text into a ResumeDocument. Never raises.

    Empty or non-string input returns the default template. Fields the
    parser cannot locate are filled from the default template.

    Example:
        >>> doc = parse_resume("Jane Doe\\njane@x.com\\n555-123-4567")
        >>> doc.personal_info.name
        'Jane Doe'
    """
    return parse_resume_outcome(raw_text, tables=tables, defaults=defaults).document

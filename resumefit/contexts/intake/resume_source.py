"""
Resume source loading for the Intake context.

The only I/O in front of the parser. Failures here are surfaced as
ResumeSourceError subclasses instead of being folded into the default
template, so callers can tell "no resume provided" from "resume provided
but unreadable".

Supported sources:
- .txt / .md: read as UTF-8 text
- .pdf: text extracted page by page with pdfplumber
- .yaml / .yml: a cached parse written by ResumeDocument.to_yaml()
"""

from pathlib import Path
from typing import Optional

import pdfplumber

from resumefit.contexts.intake.exceptions import ResumeExtractionError, ResumeNotFoundError
from resumefit.contexts.intake.logger import _log_debug, _log_info, _log_warning
from resumefit.contexts.intake.resume_parser import parse_resume_outcome
from resumefit.contexts.templating.resume_data_structure import ResumeDocument
from resumefit.utils.keyword_tables import KeywordTables

TEXT_SUFFIXES = {".txt", ".md", ".text"}
PDF_SUFFIXES = {".pdf"}
CACHE_SUFFIXES = {".yaml", ".yml"}


def extract_pdf_text(pdf_path: Path) -> str:
    """
    Extract text from every page of a PDF.

    Raises:
        ResumeExtractionError: If pdfplumber cannot open or read the file
    """
    try:
        with pdfplumber.open(pdf_path) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        raise ResumeExtractionError(f"Could not read PDF: {e}", path=pdf_path) from e

    _log_debug(f"Extracted {len(pages)} PDF pages from {pdf_path.name}")
    return "\n\n".join(page.strip() for page in pages if page.strip())


def load_resume_text(resume_path: Path) -> str:
    """
    Load raw resume text from a file.

    Args:
        resume_path: Path to a .txt, .md or .pdf resume

    Returns:
        Raw resume text

    Raises:
        ResumeNotFoundError: If the file does not exist
        ResumeExtractionError: If the file type is unsupported or yields no text
    """
    resume_path = Path(resume_path)
    if not resume_path.exists():
        raise ResumeNotFoundError("Resume file not found", path=resume_path)

    suffix = resume_path.suffix.lower()
    if suffix in TEXT_SUFFIXES:
        try:
            text = resume_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ResumeExtractionError("Resume file is not UTF-8 text", path=resume_path) from e
    elif suffix in PDF_SUFFIXES:
        text = extract_pdf_text(resume_path)
    else:
        raise ResumeExtractionError(
            f"Unsupported resume file type '{suffix}' "
            f"(expected one of {sorted(TEXT_SUFFIXES | PDF_SUFFIXES)})",
            path=resume_path,
        )

    if not text.strip():
        raise ResumeExtractionError("No text could be extracted from resume", path=resume_path)

    _log_info(f"Loaded resume text from {resume_path.name} ({len(text)} chars)")
    return text


def load_base_resume(
    resume_path: Path,
    cache_path: Optional[Path] = None,
    tables: Optional[KeywordTables] = None,
) -> ResumeDocument:
    """
    Load the base resume once, reusing a cached parse when one exists.

    Args:
        resume_path: Resume source (.txt/.md/.pdf), or a cached .yaml parse
        cache_path: Where to read/write the cached parse. When given and the
                    file exists it is loaded instead of re-parsing; when given
                    and missing, the fresh parse is written there.
        tables: Keyword tables for parsing

    Returns:
        Parsed ResumeDocument

    Raises:
        ResumeNotFoundError: If the resume source does not exist
        ResumeExtractionError: If the source yields no text
    """
    resume_path = Path(resume_path)

    if resume_path.suffix.lower() in CACHE_SUFFIXES:
        if not resume_path.exists():
            raise ResumeNotFoundError("Cached resume not found", path=resume_path)
        _log_info(f"Loading cached resume parse from {resume_path}")
        return ResumeDocument.from_yaml(resume_path)

    if cache_path is not None and Path(cache_path).exists():
        _log_info(f"Loading cached resume parse from {cache_path}")
        return ResumeDocument.from_yaml(Path(cache_path))

    outcome = parse_resume_outcome(load_resume_text(resume_path), tables=tables)
    if outcome.is_fallback:
        _log_warning(f"Resume parsed with fallbacks: {'; '.join(outcome.reasons)}")

    if cache_path is not None:
        outcome.document.to_yaml(Path(cache_path))
        _log_debug(f"Cached resume parse to {cache_path}")

    return outcome.document

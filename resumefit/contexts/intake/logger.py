"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from resumefit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Path, source: Optional[Path] = None) -> Path:
    """
    Setup logger for a resume parsing session.

    Args:
        log_dir: Directory for this intake session
        source: Resume file being parsed (recorded in provenance)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="intake",
        log_dir=log_dir,
        extra_provenance={"Resume": str(source) if source else "(text input)"},
    )


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_parse_outcome(resume_name: str, outcome, elapsed_time: float) -> None:
    """
    Log how a parse ended.

    Args:
        resume_name: Resume identifier (usually the file name)
        outcome: Parsed or Fallback from parse_resume_outcome()
        elapsed_time: Seconds spent loading and parsing
    """
    document = outcome.document
    _log_debug(
        f"{resume_name}: {len(document.experience)} experience entries, "
        f"{len(document.core_competencies)} competencies, "
        f"{len(document.certifications)} certifications"
    )

    if outcome.is_fallback:
        _log_warning(f"{resume_name}: parsed with fallbacks ({elapsed_time:.2f}s)")
        for reason in outcome.reasons:
            _log_warning(f"  Reason: {reason}")
        return

    _log_success(f"{resume_name}: parsed ({elapsed_time:.2f}s)")
    if outcome.missing_fields:
        _log_info(f"  Backfilled: {', '.join(outcome.missing_fields)}")

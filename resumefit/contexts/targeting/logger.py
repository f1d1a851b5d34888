"""
Targeting context logger.

Provides logging interface for targeting context with automatic [target] prefix.
All targeting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from resumefit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[target]"


def setup_targeting_logger(log_dir: Path, job_title: str = "") -> Path:
    """
    Setup logger for targeting context.

    Args:
        log_dir: Directory for this tailoring session
        job_title: Title of the job being tailored for (recorded in provenance)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="target",
        log_dir=log_dir,
        extra_provenance={"Job": job_title or "(none)"},
    )


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [target] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [target] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_tailoring_result(result, elapsed_time: float) -> None:
    """
    Log the outcome of one tailoring run.

    Args:
        result: TailoringResult from TailoringEngine.tailor()
        elapsed_time: Seconds spent tailoring
    """
    if not result.applied:
        _log_warning(f"Tailoring not applied ({elapsed_time:.2f}s): {result.failure_reason}")
        return

    for scored in result.ranking:
        factors = ", ".join(f"{name}={points}" for name, points in scored.breakdown.items())
        _log_debug(f"  {scored.score:4d}  {scored.entry.company or '(no company)'}: {factors}")

    missed = [match.keyword for match in result.keyword_matches if not match.matched]
    _log_success(f"Tailored as {result.job_category} ({elapsed_time:.2f}s), ATS score {result.ats_score}%")
    if missed:
        _log_info(f"  Keywords not found in resume: {', '.join(missed)}")

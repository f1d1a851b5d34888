"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from resumefit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, template_name: str = "resume") -> Path:
    """
    Setup logger for a rendering session.

    Args:
        log_dir: Directory for this templating session
        template_name: Template being rendered (recorded in provenance)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Template": template_name},
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_saved_resume(output_path: Path, text: str, replaced: bool) -> None:
    """Log where a rendered resume was written and whether it overwrote an earlier one."""
    _log_success(f"Saved tailored resume to {output_path}")
    _log_debug(f"  {text.count(chr(10))} lines, {len(text)} chars")
    if replaced:
        _log_info(f"  Replaced an earlier resume for the same job: {output_path.name}")

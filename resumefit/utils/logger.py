"""
Loguru session setup shared by the intake, targeting and templating contexts.

A session is one directory under LOGS_PATH (e.g. outs/logs/tailor_20251114_123456).
Each context writes its own <context>.log there with every DEBUG line, while
the console shows INFO and above. Context modules never call this directly;
they go through contexts/{context}/logger.py, which adds the message prefix.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

import resumefit

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"
PROVENANCE_RULE = "=" * 80

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Start a logging session for one context.

    Replaces any sinks already configured, so the most recent session wins.

    Args:
        context_name: Log file stem ("intake", "target" or "template")
        log_dir: Session directory, created if missing
        extra_provenance: Context-specific lines for the provenance header
        console_level: Lowest level echoed to stdout

    Returns:
        Path to the session's log file

    Example:
        log_file = setup_logger("target", Path("outs/logs/tailor_20251114_123456"),
                                extra_provenance={"Job": "Data Entry Clerk"})
    """
    session_dir = Path(log_dir)
    session_dir.mkdir(parents=True, exist_ok=True)
    log_file = session_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance({"Context": context_name, **(extra_provenance or {})})
    return log_file


def session_provenance() -> Dict[str, str]:
    """Where and how the current process was started."""
    return {
        "Script": sys.argv[0],
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "Python": sys.version.split()[0],
        "resumefit": resumefit.__version__,
    }


def log_provenance(extra_context: Optional[Dict[str, str]] = None) -> None:
    """Write the provenance header, followed by any context-specific lines."""
    logger.info(PROVENANCE_RULE)
    for key, value in {**session_provenance(), **(extra_context or {})}.items():
        logger.info(f"{key}: {value}")
    logger.info(PROVENANCE_RULE)

"""Custom exceptions for the intake context."""

from pathlib import Path
from typing import Optional


class ResumeSourceError(Exception):
    """
    Base exception for failures loading a resume from its source.

    Parsing itself never raises; these errors only come from the I/O step
    in front of it, so callers can tell "no resume provided" apart from
    "resume provided but unreadable".

    Attributes:
        message: Error description
        path: Source file involved, if any
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path

        if path is not None:
            message = f"{message}\nSource: {path}"

        super().__init__(message)


class ResumeNotFoundError(ResumeSourceError):
    """Raised when the resume source file does not exist."""

    pass


class ResumeExtractionError(ResumeSourceError):
    """
    Raised when a resume file exists but no text can be extracted from it.

    Covers unsupported file types, unreadable PDFs and files whose extracted
    text is empty.
    """

    pass


class InvalidJobPostingError(ValueError):
    """Raised when job posting input is missing its title or has the wrong shape."""

    pass

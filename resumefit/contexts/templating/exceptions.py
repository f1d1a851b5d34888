"""Custom exceptions for the templating context."""

from typing import Optional


class TemplateRenderError(Exception):
    """
    Exception raised when resume text rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the template being rendered
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.original_error = original_error

        parts = [message]

        if template_name:
            parts.append(f"\nTemplate: {template_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class InvalidResumeStructureError(ValueError):
    """
    Exception raised when stored resume data doesn't match the ResumeDocument shape.

    Raised when loading a cached parse whose YAML is missing the 'resume' key
    or has sections of the wrong type.
    """

    pass

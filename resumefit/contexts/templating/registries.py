"""
Templating Registries

Centralized registry for loading and caching the plain-text resume templates.
"""

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

load_dotenv()
TEMPLATES_PATH = Path(
    os.getenv(
        "RESUMEFIT_TEMPLATES_PATH",
        str(Path(__file__).resolve().parent / "templates"),
    )
)


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for resume text.

    Templates are stored in resumefit/contexts/templating/templates/{name}.txt.jinja.
    Block tags consume their own line (trim_blocks + lstrip_blocks), so each
    template line maps to exactly one output line.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding *.txt.jinja files. Defaults to
                            RESUMEFIT_TEMPLATES_PATH from environment
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def get_template(self, template_name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            template_name: Template name without suffix (e.g., 'resume')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if template_name in self._cache:
            return self._cache[template_name]

        template = self.env.get_template(f"{template_name}.txt.jinja")
        self._cache[template_name] = template
        return template

    def get_template_path(self, template_name: str) -> Path:
        """Get the file path for a template."""
        return self.templates_path / f"{template_name}.txt.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, template_name: str) -> bool:
        """Check if a template is in the cache."""
        return template_name in self._cache

"""
Default resume template for resumefit.

Provides the template used by:
- resume_parser.py (returned for empty input, backfills unparsed fields)
- scripts that need a base resume when none is supplied

The template lives in config/default_resume.yaml. Personal fields resolve
YOUR_NAME, YOUR_EMAIL, YOUR_PHONE, SEARCH_LOCATION and YOUR_LINKEDIN from the
environment through OmegaConf interpolation.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from resumefit.contexts.templating.resume_data_structure import ResumeDocument

load_dotenv()

PACKAGED_DEFAULT_RESUME_PATH = Path(__file__).resolve().parent / "config" / "default_resume.yaml"


def get_default_resume(template_path: Optional[Path] = None) -> ResumeDocument:
    """
    Load the default resume template.

    Loaded fresh on every call so environment overrides are always current.
    Two calls with the same environment return equal documents.

    Args:
        template_path: YAML template. Defaults to RESUMEFIT_DEFAULT_RESUME from
                       the environment, then to the packaged template.

    Returns:
        Default ResumeDocument
    """
    if template_path is None:
        env_path = os.getenv("RESUMEFIT_DEFAULT_RESUME")
        template_path = Path(env_path) if env_path else PACKAGED_DEFAULT_RESUME_PATH

    config = OmegaConf.load(template_path)
    return ResumeDocument.from_dict(OmegaConf.to_container(config, resolve=True)["resume"])

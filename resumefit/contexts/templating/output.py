"""
Saving rendered resumes.

Tailored resumes are written as plain text to TAILORED_RESUMES_PATH
(default: outs/tailored_resumes) with one file per job:

    resume_<Company>_<Title>.txt

Every non-alphanumeric character in the company and title becomes "_".
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from resumefit.contexts.intake.job_posting import JobPosting
from resumefit.contexts.templating.logger import log_saved_resume
from resumefit.utils.text_processing import safe_filename_part

load_dotenv()
TAILORED_RESUMES_PATH = Path(os.getenv("TAILORED_RESUMES_PATH", "outs/tailored_resumes"))


def tailored_resume_filename(job: JobPosting) -> str:
    """
    Output filename for a job.

    Example:
        >>> tailored_resume_filename(JobPosting(title="Data Entry Clerk", company="Acme, Inc."))
        'resume_Acme__Inc__Data_Entry_Clerk.txt'
    """
    company = safe_filename_part(job.company or "Company")
    title = safe_filename_part(job.title)
    return f"resume_{company}_{title}.txt"


def save_tailored_resume(text: str, job: JobPosting, output_dir: Optional[Path] = None) -> Path:
    """
    Write rendered resume text for a job.

    Args:
        text: Rendered resume text
        job: Job the resume was tailored for (names the file)
        output_dir: Target directory (defaults to TAILORED_RESUMES_PATH)

    Returns:
        Path to the written file
    """
    output_dir = Path(output_dir) if output_dir is not None else TAILORED_RESUMES_PATH
    output_dir.mkdir(parents=True, exist_ok=True)

    output_path = output_dir / tailored_resume_filename(job)
    replaced = output_path.exists()
    output_path.write_text(text, encoding="utf-8")
    log_saved_resume(output_path, text, replaced)
    return output_path

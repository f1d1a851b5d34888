#!/usr/bin/env python3
"""
Tailor a resume for a job.

Loads the base resume (from a cached YAML parse when available), tailors it
for a job, renders the result as plain text and saves it to
TAILORED_RESUMES_PATH.

Usage:
    python scripts/tailor_resume.py resume.txt --job-file jobs/DataEntry_Acme.md
    python scripts/tailor_resume.py resume.txt --title "Data Entry Clerk" --company Acme
    python scripts/tailor_resume.py outs/base_resume.yaml --job-file job.md --print
"""

import os
import time
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from resumefit.contexts.intake.exceptions import InvalidJobPostingError, ResumeSourceError
from resumefit.contexts.intake.job_posting import JobPosting
from resumefit.contexts.intake.resume_source import load_base_resume
from resumefit.contexts.targeting.logger import log_tailoring_result, setup_targeting_logger
from resumefit.contexts.targeting.tailoring import TailoringEngine, tailor_objective
from resumefit.contexts.templating.exceptions import TemplateRenderError
from resumefit.contexts.templating.output import save_tailored_resume
from resumefit.contexts.templating.text_renderer import render_resume_text
from resumefit.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(help="Tailor a resume for a job posting.", add_completion=False)


def load_job(
    job_file: Optional[Path], title: Optional[str], company: str, location: str, description: str
) -> JobPosting:
    """Build the job from a markdown file or from command-line fields."""
    if job_file:
        return JobPosting.from_file(job_file)
    return JobPosting.from_dict(
        {"title": title, "company": company, "location": location, "description": description}
    )


@app.command()
def main(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume (.txt/.md/.pdf) or cached parse (.yaml)", resolve_path=True),
    ],
    job_file: Annotated[
        Optional[Path],
        typer.Option("--job-file", "-j", help="Markdown job notes", exists=True, dir_okay=False),
    ] = None,
    title: Annotated[Optional[str], typer.Option("--title", "-t", help="Job title")] = None,
    company: Annotated[str, typer.Option("--company", help="Hiring company")] = "",
    location: Annotated[str, typer.Option("--location", help="Job location")] = "",
    description: Annotated[
        str, typer.Option("--description", "-d", help="Job description text")
    ] = "",
    cache: Annotated[
        Optional[Path],
        typer.Option("--cache", "-c", help="Cached parse to reuse (written if missing)"),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for the tailored resume"),
    ] = None,
    print_text: Annotated[
        bool, typer.Option("--print", "-p", help="Print the tailored resume text")
    ] = False,
):
    """Tailor a resume for one job and save the rendered text."""
    if not job_file and not title:
        typer.echo("Error: Must specify either --job-file or --title", err=True)
        raise typer.Exit(code=1)

    try:
        job = load_job(job_file, title, company, location, description)
    except InvalidJobPostingError as e:
        typer.secho(f"ERROR: Invalid job: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_dir = LOGS_PATH / f"tailor_{now()}"
    setup_targeting_logger(log_dir, job_title=job.title)

    try:
        resume = load_base_resume(resume_file, cache_path=cache)
    except ResumeSourceError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    start_time = time.time()
    result = TailoringEngine().tailor(resume, job)
    log_tailoring_result(result, time.time() - start_time)

    typer.echo("\n=== Job ===")
    typer.echo(f"  {job.title}" + (f" at {job.company}" if job.company else ""))
    typer.echo(f"  category: {result.job_category}")
    typer.echo(f"  objective: {tailor_objective(job)}")

    typer.echo("\n=== Experience Ranking ===")
    for scored in result.ranking:
        typer.echo(f"  {scored.score:4d}  {scored.entry.title} | {scored.entry.company}")

    typer.echo("\n=== Notes ===")
    for note in result.notes:
        typer.echo(f"  - {note}")

    if not result.applied:
        typer.secho(f"\n! Tailoring not applied: {result.failure_reason}", fg=typer.colors.YELLOW)

    typer.echo(f"\n=== ATS Score: {result.ats_score}% ===")
    for match in result.keyword_matches:
        mark = "✓" if match.matched else "✗"
        typer.echo(f"  {mark} {match.keyword} ({match.count})")

    try:
        text = render_resume_text(result.document)
    except TemplateRenderError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output_path = save_tailored_resume(text, job, output_dir)
    if print_text:
        typer.echo("\n" + text)

    typer.echo(f"\nLog directory: {log_dir}")
    typer.secho(f"\n✓ Saved tailored resume: {output_path}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()

#!/usr/bin/env python3
"""
Parse a resume and show the extracted structure.

Prints each section the parser produced and which fields were backfilled
from the default template, so a new resume layout can be checked before it
is used for tailoring.

Usage:
    python scripts/parse_resume.py resume.txt
    python scripts/parse_resume.py resume.pdf --cache outs/base_resume.yaml
    python scripts/parse_resume.py resume.txt --render
"""

import os
import time
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from resumefit.contexts.intake.exceptions import ResumeSourceError
from resumefit.contexts.intake.logger import log_parse_outcome, setup_intake_logger
from resumefit.contexts.intake.resume_parser import parse_resume_outcome
from resumefit.contexts.intake.resume_source import load_resume_text
from resumefit.contexts.templating.text_renderer import render_resume_text
from resumefit.utils.text_processing import truncate_display
from resumefit.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(help="Parse a resume and display the extracted structure.", add_completion=False)


@app.command()
def main(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume file (.txt, .md or .pdf)", dir_okay=False, resolve_path=True),
    ],
    cache: Annotated[
        Optional[Path],
        typer.Option("--cache", "-c", help="Save the parse as YAML for later tailoring"),
    ] = None,
    render: Annotated[
        bool,
        typer.Option("--render", "-r", help="Print the parsed resume as rendered text"),
    ] = False,
):
    """Parse a resume and display extracted sections and backfilled fields."""
    log_dir = LOGS_PATH / f"parse_{now()}"
    setup_intake_logger(log_dir, source=resume_file)

    start_time = time.time()
    try:
        text = load_resume_text(resume_file)
    except ResumeSourceError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    outcome = parse_resume_outcome(text)
    log_parse_outcome(resume_file.name, outcome, time.time() - start_time)
    document = outcome.document
    info = document.personal_info

    typer.echo("\n=== Contact ===")
    for field_name in ("name", "email", "phone", "location", "linkedin"):
        typer.echo(f"  {field_name}: {getattr(info, field_name) or '(none)'}")

    typer.echo("\n=== Summary ===")
    typer.echo(f"  {truncate_display(document.professional_summary, 100)}")

    typer.echo(f"\n=== Competencies ({len(document.core_competencies)}) ===")
    typer.echo(f"  {', '.join(document.core_competencies) or 'None'}")

    typer.echo(f"\n=== Experience ({len(document.experience)}) ===")
    for entry in document.experience:
        typer.echo(f"  {entry.title} | {entry.company} | {entry.duration or '(no dates)'}")
        for achievement in entry.achievements:
            typer.echo(f"    - {truncate_display(achievement, 90)}")

    typer.echo(f"\n=== Education ({len(document.education)}) ===")
    for entry in document.education:
        typer.echo(f"  {entry.degree} | {entry.school} | {entry.year}")

    typer.echo(f"\n=== Certifications ({len(document.certifications)}) ===")
    typer.echo(f"  {', '.join(document.certifications) or 'None'}")

    if outcome.is_fallback:
        typer.echo("\n=== Fallback ===")
        for reason in outcome.reasons:
            typer.echo(f"  ! {reason}")
    elif outcome.missing_fields:
        typer.echo("\n=== Backfilled From Default Template ===")
        typer.echo(f"  {', '.join(outcome.missing_fields)}")

    if cache:
        cache_path = document.to_yaml(cache)
        typer.echo(f"\nCached parse: {cache_path}")

    if render:
        typer.echo("\n=== Rendered ===")
        typer.echo(render_resume_text(document))

    typer.echo(f"\nLog directory: {log_dir}")
    typer.secho("\n✓ Parsing complete", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()

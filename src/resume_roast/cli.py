"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import getpass
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from resume_roast.analysis.keyword_extractor import extract_keywords
from resume_roast.clients.llm_client import LLMClient
from resume_roast.config import AppConfig, load_config
from resume_roast.errors import RateLimitExceededError, ResumeRoastError
from resume_roast.export.renderer import render_to_html, save_html
from resume_roast.models.resume import TemplateTag
from resume_roast.models.roast import RoastResult
from resume_roast.parsers.jd_parser import load_jd_file
from resume_roast.parsers.resume_parser import parse_resume
from resume_roast.pipeline.orchestrator import ResumeService
from resume_roast.storage.resume_store import ResumeStore

app = typer.Typer(
    name="resume-roast",
    help="Resume roast, ATS scoring and job-tailored resume generation",
    no_args_is_help=True,
)
console = Console()

LOCAL_CLIENT = "cli"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _service(config: AppConfig) -> ResumeService:
    llm = LLMClient(
        timeout=config.llm.timeout,
        max_retries=config.llm.max_retries,
        base_delay=config.llm.base_delay,
    )
    store = ResumeStore(config.storage.resolved_db_path)
    return ResumeService(llm, config=config, store=store)


def _require_file(path: Path, what: str) -> None:
    if not path.exists():
        console.print(f"[red]{what} not found: {path}[/red]")
        raise typer.Exit(1)


def _run(coro):
    """Run a service coroutine, turning pipeline errors into a friendly exit."""
    try:
        return asyncio.run(coro)
    except RateLimitExceededError as e:
        console.print(f"[red]Too many requests. Please wait {e.retry_after}s and try again.[/red]")
        raise typer.Exit(1)
    except ResumeRoastError as e:
        console.print(f"[red]{e}[/red]")
        console.print("[red]Something went wrong, please try again.[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Could not read the model response: {e}[/red]")
        raise typer.Exit(1)


def _read_resume(path: Path) -> str:
    try:
        return parse_resume(path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _score_color(score: int) -> str:
    if score >= 70:
        return "green"
    if score >= 40:
        return "yellow"
    return "red"


def _print_roast(roast: RoastResult) -> None:
    color = _score_color(roast.shortlist_probability)
    console.print(Panel(
        f"[bold]{roast.verdict.value.upper()}[/bold]: {roast.verdict_reason}\n\n"
        f"Shortlist probability: [bold {color}]{roast.shortlist_probability}%[/bold {color}] | "
        f"ATS: {roast.ats_score} | Keyword match: {roast.keyword_match_percent}%",
        title="Verdict",
    ))

    if roast.top_3_rejection_reasons:
        console.print("\n[bold]Why you'll get rejected:[/bold]")
        for i, reason in enumerate(roast.top_3_rejection_reasons, 1):
            console.print(f"  {i}. {reason}")

    table = Table(title="Section scores")
    table.add_column("Section")
    table.add_column("Score", justify="right")
    table.add_column("Roast")
    for name, section in roast.sections.model_dump().items():
        table.add_row(name.title(), str(section["score"]), section["roast"])
    console.print(table)

    if roast.keyword_gaps:
        console.print(f"\n[yellow]Keyword gaps:[/yellow] {', '.join(roast.keyword_gaps)}")
    if roast.jd_mismatch.missing_requirements:
        console.print("[yellow]Missing requirements:[/yellow]")
        for item in roast.jd_mismatch.missing_requirements:
            console.print(f"  - {item}")

    console.print(Panel(roast.overall_roast, title="Overall"))
    if roast.is_fallback:
        console.print("[dim]Detailed analysis was unavailable; showing generic feedback.[/dim]")


@app.command()
def roast(
    resume: Path = typer.Option(..., "--resume", help="Resume file (PDF/DOCX/TXT/MD)"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """Roast a resume against a job description."""
    _require_file(resume, "Resume file")
    _require_file(jd, "Job description file")

    config = load_config()
    service = _service(config)
    resume_text = _read_resume(resume)
    jd_text = load_jd_file(jd)

    with console.status("Roasting your resume..."):
        result = _run(service.roast(LOCAL_CLIENT, resume_text, jd_text))

    if as_json:
        console.print_json(result.model_dump_json())
    else:
        _print_roast(result)


@app.command("parse-cv")
def parse_cv(
    resume: Path = typer.Option(..., "--resume", help="Resume file (PDF/DOCX/TXT/MD)"),
    owner: str = typer.Option(None, "--owner", help="Profile owner id (default: current user)"),
) -> None:
    """Parse a resume into a structured master CV and store it."""
    _require_file(resume, "Resume file")
    owner = owner or getpass.getuser()

    config = load_config()
    service = _service(config)
    resume_text = _read_resume(resume)

    with console.status("Parsing master CV..."):
        profile = _run(service.parse_master_cv(LOCAL_CLIENT, owner, resume_text))

    console.print(Panel(
        f"[bold]{profile.contact.full_name or '(no name found)'}[/bold]\n"
        f"Roles: {len(profile.experience)} | Projects: {len(profile.projects)} | "
        f"Skills: {len(profile.all_skills())}",
        title=f"Master CV saved for {owner}",
    ))


@app.command()
def tailor(
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    owner: str = typer.Option(None, "--owner", help="Profile owner id (default: current user)"),
    template: TemplateTag = typer.Option(TemplateTag.MODERN, "--template", "-t", help="Resume template"),
    cover_letter: bool = typer.Option(False, "--cover-letter", help="Also write a cover letter"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file (.txt)"),
    html: bool = typer.Option(False, "--html", help="Also write an HTML preview"),
) -> None:
    """Generate a resume tailored to a job description from the stored master CV."""
    _require_file(jd, "Job description file")
    owner = owner or getpass.getuser()

    config = load_config()
    service = _service(config)
    jd_text = load_jd_file(jd)

    with console.status("Generating tailored resume..."):
        result = _run(service.generate(
            LOCAL_CLIENT,
            owner,
            jd_text,
            template=template,
            include_cover_letter=cover_letter,
        ))

    if output is None:
        output = Path(f"./output/resume_{result.id or 'draft'}.txt")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result.content, encoding="utf-8")
    console.print(f"\n[green]Resume saved: {output}[/green]")

    if result.cover_letter:
        letter_path = output.with_name(output.stem + "_cover_letter.txt")
        letter_path.write_text(result.cover_letter, encoding="utf-8")
        console.print(f"[green]Cover letter saved: {letter_path}[/green]")

    analysis = result.ats_analysis
    if analysis:
        color = _score_color(analysis.ats_score)
        console.print(Panel(
            f"[bold {color}]ATS match: {analysis.match_score}[/bold {color}]\n{analysis.reasoning}\n\n"
            f"Matched skills: {', '.join(analysis.matched_skills) or '-'}\n"
            f"Missing skills: {', '.join(analysis.missing_skills) or '-'}\n"
            f"Missing keywords: {', '.join(analysis.missing_keywords) or '-'}",
            title="ATS analysis",
        ))

    if html:
        html_path = save_html(render_to_html(result), output.with_suffix(".html"))
        console.print(f"[green]HTML saved: {html_path}[/green]")


@app.command()
def analyze(
    resume: Path = typer.Option(..., "--resume", help="Resume file (PDF/DOCX/TXT/MD)"),
) -> None:
    """General ATS review of a resume, no job description needed."""
    _require_file(resume, "Resume file")

    config = load_config()
    service = _service(config)
    resume_text = _read_resume(resume)

    with console.status("Analyzing resume..."):
        result = _run(service.analyze(LOCAL_CLIENT, resume_text))

    color = _score_color(result.ats_score)
    console.print(Panel(
        f"[bold {color}]ATS score: {result.ats_score}[/bold {color}]\n\n{result.overall_feedback}",
        title="Resume analysis",
    ))
    for section in result.sections:
        console.print(f"  [bold]{section.name}[/bold] ({section.score}): {section.feedback}")


@app.command()
def history(
    owner: str = typer.Option(None, "--owner", help="Profile owner id (default: current user)"),
    limit: int = typer.Option(20, "--limit", "-n", help="Number of entries"),
) -> None:
    """List previously generated resumes."""
    owner = owner or getpass.getuser()
    config = load_config()
    store = ResumeStore(config.storage.resolved_db_path)
    try:
        resumes = store.list_resumes(owner, limit=limit)
    except ResumeRoastError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not resumes:
        console.print(f"[yellow]No generated resumes for {owner}.[/yellow]")
        return

    table = Table(title=f"Generated resumes for {owner}")
    table.add_column("ID")
    table.add_column("Created")
    table.add_column("Template")
    table.add_column("ATS", justify="right")
    table.add_column("Job description")
    for r in resumes:
        table.add_row(
            r.id or "",
            r.created_at.strftime("%Y-%m-%d %H:%M"),
            r.template.value,
            str(r.ats_score),
            r.job_description[:60].replace("\n", " "),
        )
    console.print(table)


@app.command()
def keywords(
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
) -> None:
    """Show the keywords extracted from a job description (offline)."""
    _require_file(jd, "Job description file")
    found = sorted(extract_keywords(load_jd_file(jd)))
    console.print(f"[bold]{len(found)} keywords[/bold]")
    console.print(", ".join(found))


if __name__ == "__main__":
    app()

"""Document Style Profiler CLI."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from docstyle.config import settings
from docstyle.exceptions import NoDocumentsAnalyzedError
from docstyle.models import BatchAnalysis
from docstyle.pipeline import BatchAnalyzer, ContentComposer, parse_fallback

app = typer.Typer(
    name="docstyle",
    help="Infer the visual style of PDFs and outline new documents to match",
    add_completion=False,
)
console = Console()


def _print_failures(analysis_errors) -> None:
    for failure in analysis_errors:
        console.print(f"[yellow]Skipped {failure.filename}:[/yellow] {failure.reason}")


def _run_batch(pdfs: list[Path]) -> BatchAnalysis:
    try:
        result = BatchAnalyzer().analyze(pdfs)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    except NoDocumentsAnalyzedError as e:
        console.print(f"[red]{e}[/red]")
        _print_failures(e.failures)
        raise typer.Exit(code=1)
    _print_failures(result.errors)
    return result


def _profile_table(result: BatchAnalysis) -> Table:
    profile = result.style_profile
    table = Table(title=f"Style profile ({profile.doc_count} documents)")
    table.add_column("Property", style="bold")
    table.add_column("Value")
    table.add_row("Fonts", ", ".join(profile.fonts) or "-")
    table.add_row("Primary / secondary", f"{profile.primary_font} / {profile.secondary_font}")
    table.add_row(
        "Sizes (body / heading / avg)",
        f"{profile.sizes.body} / {profile.sizes.heading} / {profile.sizes.avg}",
    )
    table.add_row("Colors", ", ".join(profile.colors) or "-")
    table.add_row("Bold ratio", f"{profile.emphasis.bold_ratio:.2f}")
    margins = profile.margins
    table.add_row("Margins (l / t / r / b)", f"{margins.left} / {margins.top} / {margins.right} / {margins.bottom}")
    table.add_row(
        "Punctuation",
        ", ".join(f"{name}={value}" for name, value in profile.punctuation.model_dump().items()),
    )
    return table


@app.command()
def analyze(
    pdfs: list[Path] = typer.Argument(..., help="PDF files to analyze"),
    table: bool = typer.Option(False, "--table", help="Show a summary table instead of JSON"),
) -> None:
    """Analyze PDFs and print the merged style profile."""
    result = _run_batch(pdfs)
    if table:
        console.print(_profile_table(result))
    else:
        console.print_json(result.model_dump_json())


@app.command()
def compose(
    prompt: str = typer.Argument(..., help="Free-text request to outline"),
    pdf: list[Path] = typer.Option(..., "--pdf", help="Reference PDF (repeatable)"),
) -> None:
    """Analyze reference PDFs and compose structured content for a request."""
    if not prompt.strip():
        console.print("[red]Prompt is required.[/red]")
        raise typer.Exit(code=1)

    result = _run_batch(pdf)
    composer = ContentComposer()
    content = composer.compose(prompt, result.style_profile)
    if not composer.llm_configured:
        console.print("[dim]No generative backend configured, used heuristic outline[/dim]")
    console.print_json(content.model_dump_json())


@app.command()
def outline(
    prompt: str = typer.Argument(..., help="Free-text request to outline"),
) -> None:
    """Outline a request with the heuristic parser only."""
    console.print_json(parse_fallback(prompt).model_dump_json())


@app.command()
def status() -> None:
    """Show generative backend configuration."""
    console.print("[bold blue]Document Style Profiler Status[/bold blue]")
    console.print()
    if settings.llm_configured:
        console.print(f"[green]Backend:[/green] {settings.llm_base_url} ({settings.llm_model})")
    else:
        console.print("[yellow]Backend not configured, heuristic outline parser in use[/yellow]")
    console.print(f"[dim]Max documents: {settings.max_documents}, max size: {settings.max_file_size_mb}MB[/dim]")


if __name__ == "__main__":
    app()

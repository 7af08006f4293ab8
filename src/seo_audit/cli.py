"""CLI interface for seo-audit."""

import json
import logging
import os
import sys
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .checks import ALL_CHECKS, get_checks_by_category, search_checks
from .context import build_context
from .models import AuditResults, Category, CheckStatus
from .recommendations import (
    Priority,
    format_recommendations_json,
    format_recommendations_markdown,
    generate_recommendations,
)
from .runner import AuditRunner, RunnerOptions
from .scoring import grade_for, score_breakdown


console = Console()

CATEGORY_CHOICES = [c.value for c in Category]
PRIORITY_CHOICES = [p.value for p in Priority]


def status_style(status: CheckStatus) -> str:
    """Get Rich style for a check status."""
    return {
        CheckStatus.PASSED: "green",
        CheckStatus.INFO: "blue",
        CheckStatus.WARNING: "yellow",
        CheckStatus.FAILED: "red",
        CheckStatus.SKIPPED: "dim",
    }.get(status, "white")


def status_icon(status: CheckStatus) -> str:
    return {
        CheckStatus.PASSED: "✓",
        CheckStatus.INFO: "ℹ",
        CheckStatus.WARNING: "⚠",
        CheckStatus.FAILED: "✗",
        CheckStatus.SKIPPED: "-",
    }.get(status, "•")


def score_color(score: int) -> str:
    """Get Rich color for a score value."""
    if score >= 85:
        return "green"
    elif score >= 70:
        return "yellow"
    elif score >= 50:
        return "orange1"
    else:
        return "red"


def print_score_bar(score: int, width: int = 20) -> Text:
    """Create a visual score bar."""
    filled = int((score / 100) * width)
    color = score_color(score)

    bar = Text()
    bar.append("█" * filled, style=color)
    bar.append("░" * (width - filled), style="dim")
    bar.append(f" {score}/100 ({grade_for(score).grade})", style=f"bold {color}")
    return bar


def print_result(result: AuditResults, industry: Optional[str] = None, verbose: bool = False) -> None:
    """Print audit result to console."""
    console.print()
    console.print(Panel(
        f"[bold]{result.url}[/bold]\n"
        f"[dim]{result.meta.checks_run} checks run, {result.meta.checks_skipped} skipped "
        f"in {result.meta.total_execution_time_ms:.0f}ms[/dim]",
        title="SEO Audit",
        border_style="blue",
    ))

    console.print()
    console.print("  SEO Score: ", end="")
    console.print(print_score_bar(result.score, width=25))
    console.print(f"  Status: [bold]{result.status.value.upper()}[/bold]")
    console.print()

    breakdown = score_breakdown(result, industry)

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Grade")
    table.add_column("Status")

    for cat in breakdown.categories:
        category_result = result.categories[cat.category]
        parts = []
        if category_result.failed:
            parts.append(f"[red]{category_result.failed} failed[/red]")
        if category_result.warnings:
            parts.append(f"[yellow]{category_result.warnings} warning{'s' if category_result.warnings > 1 else ''}[/yellow]")
        if cat.total == 0:
            parts.append("[dim]not applicable[/dim]")
        elif not parts:
            parts.append("[green]OK[/green]")

        table.add_row(
            cat.category_name,
            f"[{score_color(cat.score)}]{cat.score}[/]",
            cat.grade,
            ", ".join(parts),
        )

    console.print(table)

    bench = breakdown.benchmarks
    console.print(
        f"  Benchmark: industry average {bench.industry_average}, "
        f"[bold]{bench.vs_industry}[/bold], ~{bench.percentile}th percentile"
    )
    for priority in breakdown.priorities:
        console.print(f"  [magenta]→ {priority}[/magenta]")

    shown = [c for c in result.checks if verbose or c.is_issue]
    if shown:
        console.print("\n[bold]All Checks:[/bold]\n" if verbose else "\n[bold]Issues Found:[/bold]\n")
        for check in shown:
            style = status_style(check.status)
            console.print(f"  [{style}]{status_icon(check.status)}[/] {check.check_name}")
            if check.details:
                console.print(f"    [dim]{check.details}[/dim]")
            if check.is_issue and check.fix_hint:
                console.print(f"    [cyan]→ {check.fix_hint}[/cyan]")

    report = generate_recommendations(result)
    if report.quick_wins:
        console.print("\n[bold]Top Quick Wins:[/bold]\n")
        for i, rec in enumerate(report.quick_wins[:3], 1):
            console.print(f"  {i}. [bold]{rec.title}[/bold]")
            console.print(f"     [cyan]{rec.description}[/cyan]")
            console.print()

    console.print("[dim]" + "─" * 50 + "[/dim]")
    console.print(f"[dim]seo-audit v{__version__}[/dim]")
    console.print()


def selection_options(f):
    """Options shared by commands that run an audit."""
    options = [
        click.option("--html", "html_file", type=click.File("r", encoding="utf-8"), required=True,
                     help="Already-fetched page markup ('-' for stdin)"),
        click.option("-c", "--category", "categories", multiple=True, type=click.Choice(CATEGORY_CHOICES),
                     help="Only run checks in this category (repeatable)"),
        click.option("--check", "check_ids", multiple=True, help="Only run this check id (repeatable)"),
        click.option("--industry", default=None, help="Industry for gated checks and benchmarks"),
        click.option("--local/--no-local", default=True, help="Run local SEO checks"),
        click.option("--eeat/--no-eeat", default=True, help="Run E-E-A-T checks"),
        click.option("-t", "--timeout", type=click.IntRange(min=1), default=None,
                     help="Per-check timeout in milliseconds"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def run_audit(url, html_file, categories, check_ids, industry, local, eeat, timeout) -> AuditResults:
    try:
        html = html_file.read()
    except UnicodeDecodeError as e:
        raise click.BadParameter(f"not UTF-8 text: {e}", param_hint="'--html'")

    try:
        runner = AuditRunner(RunnerOptions(
            categories=list(categories) or None,
            check_ids=list(check_ids) or None,
            check_local=local,
            check_eeat=eeat,
            industry=industry,
            check_timeout_ms=timeout,
        ))
    except ValueError as e:
        raise click.ClickException(str(e))
    return runner.run_sync(build_context(url, html))


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__)
def cli(ctx):
    """SEO Audit - weighted page checks, score and fix plan.

    \b
    Quick start:
        seo-audit scan https://example.com --html page.html
        curl -s https://example.com | seo-audit recommend https://example.com --html -

    \b
    Commands:
        scan       Score a page and list its issues
        recommend  Prioritized improvement plan
        checks     List registered checks
    """
    level_name = os.getenv("SEO_AUDIT_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise click.ClickException(f"SEO_AUDIT_LOG_LEVEL: unknown log level {level_name!r}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("url")
@selection_options
@click.option("-v", "--verbose", is_flag=True, help="Show every check, not just issues")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def scan(url, html_file, categories, check_ids, industry, local, eeat, timeout, verbose, json_output):
    """Audit already-fetched markup for URL.

    \b
    Examples:
        seo-audit scan https://example.com --html page.html
        seo-audit scan https://example.com --html page.html -c technical -c schema
        seo-audit scan https://clinic.example --html page.html --industry healthcare --json
    """
    if json_output:
        result = run_audit(url, html_file, categories, check_ids, industry, local, eeat, timeout)
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    with console.status(f"[bold blue]Auditing {url}...[/bold blue]"):
        result = run_audit(url, html_file, categories, check_ids, industry, local, eeat, timeout)
    print_result(result, industry=industry, verbose=verbose)


@cli.command()
@click.argument("url")
@selection_options
@click.option("-f", "--format", "output_format", type=click.Choice(["markdown", "json"]),
              default="markdown", help="Report format")
@click.option("-n", "--limit", type=click.IntRange(min=1), default=None, help="Maximum recommendations")
@click.option("--min-priority", type=click.Choice(PRIORITY_CHOICES), default=None,
              help="Drop recommendations below this priority")
def recommend(url, html_file, categories, check_ids, industry, local, eeat, timeout,
              output_format, limit, min_priority):
    """Print a prioritized improvement plan for URL.

    \b
    Examples:
        seo-audit recommend https://example.com --html page.html
        seo-audit recommend https://example.com --html page.html -f json --limit 10
    """
    result = run_audit(url, html_file, categories, check_ids, industry, local, eeat, timeout)
    report = generate_recommendations(result, limit=limit, min_priority=min_priority)

    if output_format == "json":
        click.echo(json.dumps(format_recommendations_json(report), indent=2))
    else:
        click.echo(format_recommendations_markdown(report))


@cli.command("checks")
@click.option("-c", "--category", type=click.Choice(CATEGORY_CHOICES), default=None,
              help="Only list this category")
@click.option("-s", "--search", "query", default=None, help="Filter by name, description or tag")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def list_checks(category, query, json_output):
    """List the registered checks."""
    checks = get_checks_by_category(category) if category else list(ALL_CHECKS)
    if query:
        checks = search_checks(query, checks)

    if json_output:
        click.echo(json.dumps([
            {
                "id": c.id,
                "name": c.name,
                "category": c.category.value,
                "weight": c.weight,
                "severity": c.severity.value,
                "tags": list(c.tags),
            }
            for c in checks
        ], indent=2))
        return

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Weight", justify="right")
    table.add_column("Severity")
    for c in checks:
        table.add_row(c.id, c.name, c.category.value, str(c.weight), c.severity.value)
    console.print(table)
    console.print(f"[dim]{len(checks)} checks[/dim]")


# Convenience: allow `seo-audit URL ...` as shortcut for `seo-audit scan URL ...`
def main():
    """Entry point that handles both `seo-audit URL` and `seo-audit scan URL`."""
    args = sys.argv[1:]

    if args and not args[0].startswith("-") and args[0] not in ["scan", "recommend", "checks"]:
        if args[0].startswith(("http://", "https://")) or "." in args[0]:
            sys.argv.insert(1, "scan")

    cli()


if __name__ == "__main__":
    main()

import asyncio

import click
from pydantic import ValidationError as ConfigError
from rich.console import Console
from rich.markup import escape

from sift.config import Config
from sift.errors import AuthError, NetworkError, RateLimitError, SiftError, ValidationError
from sift.formatting import format_code_search_report, format_web_search_report
from sift.logging import configure_logging
from sift.reports import save_report
from sift.search import run_code_search, run_parallel_search
from sift.sources.github import GitHubCodeSearch, resolve_github_token
from sift.sources.parallel import ParallelSearch

console = Console(stderr=True)


@click.group(invoke_without_command=True)
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.pass_context
def main(ctx, log_level: str | None):
    """sift - ranked, deduplicated search results for coding assistants"""
    ctx.ensure_object(dict)
    try:
        config = Config()
        if log_level:
            config.log_level = log_level
    except ConfigError as e:
        console.print(f"[red]✗ Invalid configuration[/red]\n[dim]{escape(str(e))}[/dim]")
        raise SystemExit(1) from None

    configure_logging(config.log_level)
    ctx.obj["config"] = config

    if ctx.invoked_subcommand is None:
        console.print("[bold]sift[/bold] - ranked, deduplicated search results\n")
        console.print("Run [cyan]sift code-search QUERY[/cyan] or [cyan]sift web-search --objective TEXT[/cyan].")
        console.print("\nUse [cyan]sift --help[/cyan] for all commands.")


def _report_error(error: SiftError) -> None:
    if isinstance(error, AuthError):
        console.print("\n[red]✗ Authentication failed[/red]")
        console.print(f"[dim]{escape(str(error))}[/dim]")
    elif isinstance(error, RateLimitError):
        console.print("\n[red]✗ Rate limit exceeded[/red]")
        console.print(f"[dim]{escape(str(error))}[/dim]")
        if error.reset_at:
            console.print(f"[dim]Resets at: {error.reset_at.astimezone():%Y-%m-%d %H:%M:%S}[/dim]")
        if error.remaining is not None:
            console.print(f"[dim]Remaining requests: {error.remaining}[/dim]")
    elif isinstance(error, NetworkError):
        console.print("\n[red]✗ Network error[/red]")
        console.print(f"[dim]{escape(str(error))}[/dim]")
        console.print("[dim]Please check your internet connection and try again.[/dim]")
    elif isinstance(error, ValidationError):
        console.print("\n[red]✗ Validation error[/red]")
        console.print(f"[dim]{escape(str(error))}[/dim]")
        console.print("[dim]Run with --help to see valid options.[/dim]")
    else:
        console.print("\n[red]✗ Search failed[/red]")
        console.print(f"[dim]{escape(str(error))}[/dim]")


@main.command("code-search")
@click.argument("query")
@click.option("--language", default=None, help="Restrict to a language, e.g. typescript")
@click.option("--limit", type=int, default=None, help="Hits to request from GitHub before ranking")
@click.option("--top", "top_n", type=int, default=None, help="Ranked results to keep")
@click.option("--fetch", type=int, default=None, help="Fetch file contents for the first N ranked results")
@click.option("--save/--no-save", default=False, help="Save the report under the research directory")
@click.pass_context
def code_search(
    ctx,
    query: str,
    language: str | None,
    limit: int | None,
    top_n: int | None,
    fetch: int | None,
    save: bool,
):
    """Search GitHub code and rank hits by quality."""
    config: Config = ctx.obj["config"]

    try:
        source = GitHubCodeSearch(resolve_github_token(config), timeout=config.request_timeout)
        with console.status("Searching GitHub..."):
            outcome = asyncio.run(
                run_code_search(
                    source,
                    query,
                    limit=config.code_search_limit if limit is None else limit,
                    top_n=config.top_n if top_n is None else top_n,
                    fetch=config.fetch_count if fetch is None else fetch,
                    language=language,
                )
            )
    except SiftError as e:
        _report_error(e)
        raise SystemExit(1) from None

    if not outcome.results:
        console.print("[yellow]⚠ No results found[/yellow]")
        console.print("[dim]Try a different query or a broader language filter.[/dim]")
        return

    console.print(f"[green]✓ Ranked {len(outcome.results)} of {outcome.total_hits} hits[/green]")
    report = format_code_search_report(outcome)
    click.echo(report)

    if save:
        path = save_report(report, config.github_reports_dir, query)
        console.print(f"[green]✓ Saved report to {path}[/green]")


@main.command("web-search")
@click.option("--objective", required=True, help="Main search objective (natural language)")
@click.option("--query", "queries", multiple=True, help="Additional search query (repeatable, max 5)")
@click.option("--processor", default=None, help="Processing level: lite, base, pro, ultra")
@click.option("--max-results", type=int, default=None, help="Maximum results to return")
@click.option("--max-chars", type=int, default=None, help="Max characters per excerpt")
@click.option("--save/--no-save", default=False, help="Save the report under the research directory")
@click.pass_context
def web_search(
    ctx,
    objective: str,
    queries: tuple[str, ...],
    processor: str | None,
    max_results: int | None,
    max_chars: int | None,
    save: bool,
):
    """Run parallel web searches and merge the results."""
    config: Config = ctx.obj["config"]

    console.print("[dim]Search Configuration:[/dim]")
    console.print(f'[dim]  Objective: "{escape(objective)}"[/dim]')
    for i, q in enumerate(queries, start=1):
        console.print(f'[dim]    {i}. "{escape(q)}"[/dim]')

    try:
        source = ParallelSearch(config.parallel_api_key, timeout=config.request_timeout)
        with console.status("Searching..."):
            outcome = asyncio.run(
                run_parallel_search(
                    source,
                    objective,
                    list(queries),
                    processor=processor or config.processor,
                    max_results=config.max_results if max_results is None else max_results,
                    max_chars=config.max_chars if max_chars is None else max_chars,
                )
            )
    except SiftError as e:
        _report_error(e)
        raise SystemExit(1) from None

    if not outcome.results:
        console.print("[yellow]⚠ No results found[/yellow]")
        console.print("[dim]Try a different query or adjust your search parameters.[/dim]")
        return

    console.print(f"[green]✓ Found {len(outcome.results)} results[/green]")
    report = format_web_search_report(outcome)
    click.echo(report)

    if save:
        path = save_report(report, config.parallel_reports_dir, objective)
        console.print(f"[green]✓ Saved report to {path}[/green]")


if __name__ == "__main__":
    main()

"""CLI entry point for gh-showcase.

Commands:
- fetch: Curate the account's repositories and write the snapshot
- summary: Print the summary of an existing snapshot
"""

import asyncio
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from gh_showcase import __version__
from gh_showcase.config import Config, GitHubConfig, OutputConfig, load_config
from gh_showcase.curate.models import PinnedResult, Snapshot
from gh_showcase.curate.pipeline import PipelineStats, run_pipeline
from gh_showcase.curate.snapshot import read_snapshot, summarize_snapshot, write_snapshot
from gh_showcase.curate.source import RepoSourceError
from gh_showcase.github.auth import AuthenticationError
from gh_showcase.logging import setup_logging

console = Console()

DEFAULT_SNAPSHOT = OutputConfig().path


def _resolve_config(config_path: Path | None, account: str | None) -> Config:
    """Load the YAML config, or build a default one around ``--account``."""
    if config_path is not None:
        cfg = load_config(config_path)
        if account:
            cfg.github.account = account
        return cfg

    if not account:
        raise click.UsageError("Either --config or --account is required")

    return Config(github=GitHubConfig(account=account))


def _print_summary(snapshot: Snapshot, pinned: PinnedResult | None = None) -> None:
    summary = summarize_snapshot(snapshot, pinned)

    console.print()
    console.print("[bold]Project stats:[/bold]")
    console.print(f"  Total projects: {summary.total_projects}")
    console.print(f"  Total stars: {summary.total_stars}")
    console.print(f"  Total commits: {summary.total_commits}")
    console.print(f"  Average stars per project: {summary.average_stars:.1f}")
    if pinned is not None:
        console.print(f"  Pinned projects: {summary.pinned_count}")

    if summary.categories:
        table = Table(title="Categories")
        table.add_column("Category")
        table.add_column("Projects", justify="right")
        for category, count in sorted(summary.categories.items()):
            table.add_row(category, str(count))
        console.print(table)

    if summary.top_by_stars:
        console.print(f"\n[bold]Top {len(summary.top_by_stars)} projects by stars:[/bold]")
        for rank, (name, stars, commits) in enumerate(summary.top_by_stars, start=1):
            console.print(f"  {rank}. {name} - {stars} stars, {commits} commits")


def _print_run_stats(stats: PipelineStats) -> None:
    console.print()
    console.print("[bold]Run:[/bold]")
    console.print(f"  Candidate repositories: {stats.candidates}")
    console.print(f"  Passed basic filter: {stats.filtered}")
    console.print(f"  Enriched: {stats.enriched} ({len(stats.skipped)} skipped)")
    console.print(f"  Qualified: {stats.qualified}")
    console.print(f"  Featured: {stats.featured}")
    console.print(f"  API requests: {stats.requests_made} ({stats.rate_limit_hits} rate limited)")
    if stats.pinned_degraded:
        console.print("  [yellow]Pinned repositories unavailable; selected without them[/yellow]")
    for skipped in stats.skipped:
        console.print(f"  [yellow]Skipped {skipped.name}:[/yellow] {skipped.reason}")


@click.group()
@click.version_option(version=__version__, prog_name="gh-showcase")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.option("--log-json", is_flag=True, default=False, help="Emit logs as JSON lines")
@click.pass_context
def main(ctx: click.Context, verbose: bool, log_json: bool) -> None:
    """Curate GitHub repositories into a featured-projects snapshot.

    \b
    Quick Start:
        gh-showcase fetch --account octocat
        gh-showcase fetch --config showcase.yaml
        gh-showcase summary
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose, json_format=log_json)


@main.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to YAML config file",
)
@click.option("--account", "-a", default=None, help="GitHub account (overrides config)")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Snapshot path (overrides config)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Run the pipeline and print the summary without writing the snapshot",
)
@click.pass_context
def fetch(
    ctx: click.Context,
    config_path: Path | None,
    account: str | None,
    output: Path | None,
    dry_run: bool,
) -> None:
    """Fetch repositories, rank them and write the featured snapshot.

    The run is paced to stay under the GitHub rate limit and takes a few
    seconds per repository. Nothing is written if the repository listing
    fails.
    """
    try:
        cfg = _resolve_config(config_path, account)
    except ValidationError as e:
        console.print(f"[bold red]Invalid config:[/bold red] {e}")
        raise click.Abort() from e

    output_path = output or cfg.output.path

    console.print(f"[bold]Fetching GitHub repository data for {cfg.github.account}[/bold]")

    try:
        result = asyncio.run(run_pipeline(cfg))
    except KeyboardInterrupt:
        console.print("\n[yellow]Fetch interrupted by user[/yellow]")
        raise click.Abort() from None
    except (RepoSourceError, AuthenticationError) as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if ctx.obj.get("verbose"):
            console.print_exception()
        raise click.Abort() from e

    _print_run_stats(result.stats)
    _print_summary(result.snapshot, result.pinned)

    if dry_run:
        console.print("\n[cyan]Dry run: snapshot not written[/cyan]")
        return

    write_snapshot(result.snapshot, output_path)
    console.print(f"\n[bold green]✓ Data written to {output_path}[/bold green]")


@main.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Read the snapshot path from this YAML config",
)
@click.option(
    "--path",
    "-p",
    "snapshot_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Snapshot file to read (default: output.path from --config, else {DEFAULT_SNAPSHOT})",
)
def summary(config_path: Path | None, snapshot_path: Path | None) -> None:
    """Print the summary of an existing snapshot."""
    if snapshot_path is None:
        if config_path is not None:
            try:
                snapshot_path = load_config(config_path).output.path
            except ValidationError as e:
                console.print(f"[bold red]Invalid config:[/bold red] {e}")
                raise click.Abort() from e
        else:
            snapshot_path = DEFAULT_SNAPSHOT

    if not snapshot_path.exists():
        console.print(f"[bold red]Error:[/bold red] No snapshot found at {snapshot_path}")
        console.print("[yellow]Run 'fetch' first to generate it[/yellow]")
        raise click.Abort()

    try:
        snapshot = read_snapshot(snapshot_path)
    except ValidationError as e:
        console.print(f"[bold red]Invalid snapshot:[/bold red] {e}")
        raise click.Abort() from e

    console.print(f"[bold]{snapshot_path}[/bold]")
    console.print(f"  Last updated: {snapshot.last_updated.isoformat()}")
    console.print(f"  Repositories considered: {snapshot.total_repos}")
    _print_summary(snapshot)


if __name__ == "__main__":
    main()

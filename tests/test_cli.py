"""Tests for the gh-showcase CLI."""

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from gh_showcase import __version__
from gh_showcase.cli import main
from gh_showcase.config import Config
from gh_showcase.curate.models import PinnedResult, Project, SkippedRepository, Snapshot
from gh_showcase.curate.pipeline import PipelineResult, PipelineStats
from gh_showcase.curate.snapshot import read_snapshot, write_snapshot
from gh_showcase.curate.source import RepoSourceError

ProjectFactory = Callable[..., Project]


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def result(make_project: ProjectFactory) -> PipelineResult:
    """Pipeline result with two featured projects and one skipped repository."""
    projects = [
        make_project("foo-cli", category="CLI Tools", stars=3, commit_count=20),
        make_project("router", stars=10, commit_count=40),
    ]
    return PipelineResult(
        snapshot=Snapshot(
            last_updated=datetime(2024, 7, 1, tzinfo=UTC), total_repos=9, projects=projects
        ),
        catalog=projects,
        pinned=PinnedResult.ok(["router"]),
        stats=PipelineStats(
            candidates=9,
            filtered=4,
            enriched=3,
            qualified=2,
            featured=2,
            skipped=[SkippedRepository(name="stuck", reason="Rate limit exceeded")],
            requests_made=11,
            rate_limit_hits=2,
        ),
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a temporary config file."""
    path = tmp_path / "showcase.yaml"
    path.write_text(
        f"""github:
  account: octocat
filters:
  denylist: [octocat]
output:
  path: {tmp_path / "site" / "opensource.json"}
"""
    )
    return path


class TestMain:
    """Tests for the command group."""

    def test_version_flag(self, runner: CliRunner) -> None:
        """Test --version prints the version."""
        outcome = runner.invoke(main, ["--version"])
        assert outcome.exit_code == 0
        assert __version__ in outcome.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        """Test --help lists both commands."""
        outcome = runner.invoke(main, ["--help"])
        assert outcome.exit_code == 0
        assert "fetch" in outcome.output
        assert "summary" in outcome.output


class TestFetchCommand:
    """Tests for the fetch command."""

    def test_writes_snapshot(
        self, runner: CliRunner, tmp_path: Path, result: PipelineResult
    ) -> None:
        """Test a successful run writes the snapshot and prints the summary."""
        output = tmp_path / "data" / "opensource.json"

        with patch("gh_showcase.cli.run_pipeline", new=AsyncMock(return_value=result)) as run:
            outcome = runner.invoke(
                main, ["fetch", "--account", "octocat", "--output", str(output)]
            )

        assert outcome.exit_code == 0, outcome.output
        assert read_snapshot(output) == result.snapshot
        assert "Total projects: 2" in outcome.output
        assert "Pinned projects: 1" in outcome.output
        assert "Skipped stuck" in outcome.output
        config = run.call_args.args[0]
        assert isinstance(config, Config)
        assert config.github.account == "octocat"

    def test_dry_run_writes_nothing(
        self, runner: CliRunner, tmp_path: Path, result: PipelineResult
    ) -> None:
        """Test --dry-run leaves the output path untouched."""
        output = tmp_path / "opensource.json"

        with patch("gh_showcase.cli.run_pipeline", new=AsyncMock(return_value=result)):
            outcome = runner.invoke(
                main, ["fetch", "-a", "octocat", "-o", str(output), "--dry-run"]
            )

        assert outcome.exit_code == 0, outcome.output
        assert not output.exists()
        assert "Dry run" in outcome.output

    def test_config_file_and_account_override(
        self, runner: CliRunner, config_file: Path, tmp_path: Path, result: PipelineResult
    ) -> None:
        """Test the config output path is used and --account overrides the account."""
        with patch("gh_showcase.cli.run_pipeline", new=AsyncMock(return_value=result)) as run:
            outcome = runner.invoke(
                main, ["fetch", "--config", str(config_file), "--account", "hubot"]
            )

        assert outcome.exit_code == 0, outcome.output
        config = run.call_args.args[0]
        assert config.github.account == "hubot"
        assert config.filters.denylist == ["octocat"]
        assert (tmp_path / "site" / "opensource.json").exists()

    def test_listing_failure_aborts_without_writing(
        self, runner: CliRunner, tmp_path: Path, result: PipelineResult
    ) -> None:
        """Test a fatal listing error exits non-zero and keeps the previous snapshot."""
        output = tmp_path / "opensource.json"
        write_snapshot(result.snapshot, output)
        previous = output.read_text()
        failing = AsyncMock(side_effect=RepoSourceError("Failed to fetch repositories"))

        with patch("gh_showcase.cli.run_pipeline", new=failing):
            outcome = runner.invoke(main, ["fetch", "-a", "octocat", "-o", str(output)])

        assert outcome.exit_code != 0
        assert "Failed to fetch repositories" in outcome.output
        assert output.read_text() == previous

    def test_requires_config_or_account(self, runner: CliRunner) -> None:
        """Test fetch without --config or --account is a usage error."""
        outcome = runner.invoke(main, ["fetch"])
        assert outcome.exit_code == 2
        assert "--config or --account" in outcome.output

    def test_invalid_config_aborts(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a config that fails validation aborts."""
        path = tmp_path / "bad.yaml"
        path.write_text("github:\n  account: ''\n")

        outcome = runner.invoke(main, ["fetch", "--config", str(path)])

        assert outcome.exit_code != 0
        assert "Invalid config" in outcome.output


class TestSummaryCommand:
    """Tests for the summary command."""

    def test_prints_summary(
        self, runner: CliRunner, tmp_path: Path, result: PipelineResult
    ) -> None:
        """Test summary reads a snapshot and prints its stats."""
        path = tmp_path / "opensource.json"
        write_snapshot(result.snapshot, path)

        outcome = runner.invoke(main, ["summary", "--path", str(path)])

        assert outcome.exit_code == 0, outcome.output
        assert "Repositories considered: 9" in outcome.output
        assert "Total stars: 13" in outcome.output
        assert "1. router - 10 stars, 40 commits" in outcome.output

    def test_path_from_config(
        self, runner: CliRunner, config_file: Path, tmp_path: Path, result: PipelineResult
    ) -> None:
        """Test summary reads the snapshot at the configured output path."""
        write_snapshot(result.snapshot, tmp_path / "site" / "opensource.json")

        outcome = runner.invoke(main, ["summary", "--config", str(config_file)])

        assert outcome.exit_code == 0, outcome.output
        assert "Repositories considered: 9" in outcome.output

    def test_path_overrides_config(
        self, runner: CliRunner, config_file: Path, tmp_path: Path
    ) -> None:
        """Test an explicit --path wins over the configured output path."""
        missing = tmp_path / "elsewhere.json"

        outcome = runner.invoke(
            main, ["summary", "-c", str(config_file), "-p", str(missing)]
        )

        assert outcome.exit_code != 0
        assert "No snapshot found" in outcome.output

    def test_missing_snapshot(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a missing file aborts with a hint."""
        outcome = runner.invoke(main, ["summary", "-p", str(tmp_path / "none.json")])
        assert outcome.exit_code != 0
        assert "No snapshot found" in outcome.output

    def test_invalid_snapshot(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test an unreadable snapshot aborts."""
        path = tmp_path / "opensource.json"
        path.write_text('{"projects": "nope"}')

        outcome = runner.invoke(main, ["summary", "-p", str(path)])

        assert outcome.exit_code != 0
        assert "Invalid snapshot" in outcome.output

"""Curation pipeline driver.

Runs source, basic filter, enrichment, quality gate, classification and
featured selection in that order and builds the snapshot. Only a failed
repository listing aborts the run.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from gh_showcase.config import Config
from gh_showcase.curate.classify import Classifier
from gh_showcase.curate.enrich import MetricsEnricher
from gh_showcase.curate.featured import FeaturedSelector
from gh_showcase.curate.filters import FilterChain
from gh_showcase.curate.models import (
    EnrichedRepository,
    PinnedResult,
    Project,
    SkippedRepository,
    Snapshot,
)
from gh_showcase.curate.quality import QualityGate
from gh_showcase.curate.source import RepoSource
from gh_showcase.github.auth import GitHubAuth
from gh_showcase.github.graphql import GraphQLClient
from gh_showcase.github.http import GitHubClient, SleepFn
from gh_showcase.github.rest import RestClient
from gh_showcase.github.retry import RetryPolicy

logger = logging.getLogger(__name__)


@dataclass
class PipelineStats:
    """Counters reported at the end of a run."""

    candidates: int = 0
    filtered: int = 0
    enriched: int = 0
    qualified: int = 0
    featured: int = 0
    filter_rejections: dict[str, int] = field(default_factory=dict)
    quality_rejections: dict[str, str] = field(default_factory=dict)
    skipped: list[SkippedRepository] = field(default_factory=list)
    pinned_degraded: bool = False
    requests_made: int = 0
    rate_limit_hits: int = 0


@dataclass
class PipelineResult:
    """Snapshot plus everything needed to report on the run."""

    snapshot: Snapshot
    catalog: list[Project]
    pinned: PinnedResult
    stats: PipelineStats


class CurationPipeline:
    """Wire the curation stages together for one account."""

    def __init__(
        self,
        config: Config,
        source: RepoSource,
        enricher: MetricsEnricher,
        filter_chain: FilterChain | None = None,
        quality_gate: QualityGate | None = None,
        classifier: Classifier | None = None,
        selector: FeaturedSelector | None = None,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.config = config
        self.source = source
        self.enricher = enricher
        self.filter_chain = filter_chain or FilterChain(config.filters)
        self.quality_gate = quality_gate or QualityGate(config.quality)
        self.classifier = classifier or Classifier()
        self.selector = selector or FeaturedSelector(config.featured)
        self.clock = clock

    async def run(self) -> PipelineResult:
        """Execute the pipeline.

        Returns:
            PipelineResult with the snapshot and run statistics.

        Raises:
            RepoSourceError: If the repository listing fails.
        """
        account = self.config.github.account
        stats = PipelineStats()

        logger.info("=" * 60)
        logger.info("Curating repositories for %s", account)
        logger.info("=" * 60)

        repos = await self.source.list_repositories(account)
        stats.candidates = len(repos)

        pinned = await self.source.list_pinned(account)
        stats.pinned_degraded = pinned.degraded

        candidates = self.filter_chain.apply(repos)
        stats.filtered = len(candidates)
        stats.filter_rejections = self.filter_chain.get_stats()

        enrichment = self.config.enrichment
        per_repo_seconds = enrichment.pacing_seconds + enrichment.request_delay_seconds
        if candidates:
            logger.info(
                "Checking %d repositories; pacing keeps this to about %.0f seconds per repository",
                len(candidates),
                per_repo_seconds,
            )

        qualified: list[EnrichedRepository] = []

        def gate(enriched: EnrichedRepository) -> None:
            result = self.quality_gate.evaluate(enriched)
            repo, metrics = enriched.repo, enriched.metrics
            if result.passed:
                qualified.append(enriched)
                logger.info(
                    "included %s: %d commits%s, %d releases, %d stars",
                    repo.name,
                    metrics.commit_count,
                    " (estimated)" if metrics.commit_count_estimated else "",
                    metrics.release_count,
                    repo.stars,
                )
            else:
                stats.quality_rejections[repo.name] = result.reason or ""
                logger.info("excluded %s: %s", repo.name, result.reason)

        report = await self.enricher.enrich(candidates, on_enriched=gate)
        stats.enriched = len(report.enriched)
        stats.skipped = report.skipped
        stats.qualified = len(qualified)

        catalog = [self.classifier.classify(enriched) for enriched in qualified]
        featured = self.selector.select(catalog, pinned)
        stats.featured = len(featured)

        snapshot = Snapshot(
            last_updated=self.clock(),
            total_repos=stats.candidates,
            projects=featured,
        )

        logger.info(
            "Processed %d repositories: %d qualified, %d featured, %d skipped",
            stats.filtered,
            stats.qualified,
            stats.featured,
            len(stats.skipped),
        )
        return PipelineResult(snapshot=snapshot, catalog=catalog, pinned=pinned, stats=stats)


async def run_pipeline(
    config: Config,
    auth: GitHubAuth | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> PipelineResult:
    """Build clients from configuration and run the pipeline.

    Args:
        config: Application configuration.
        auth: Authentication; loaded from ``config.github.auth.token_env`` if None.
        sleep: Coroutine used for every pacing, cooldown and backoff wait.

    Returns:
        PipelineResult for the configured account.

    Raises:
        RepoSourceError: If the repository listing fails.
        AuthenticationError: If the configured token is malformed.
    """
    auth = auth or GitHubAuth(token_env=config.github.auth.token_env)

    async with GitHubClient(
        auth=auth,
        timeout=config.github.timeout_seconds,
        max_retries=config.github.max_retries,
        base_url=config.github.api_url,
        sleep=sleep,
    ) as http_client:
        rest = RestClient(http_client)
        source = RepoSource(rest, GraphQLClient(http_client), per_page=config.enrichment.per_page)
        enricher = MetricsEnricher(
            rest,
            config.github.account,
            config.enrichment,
            retry_policy=RetryPolicy(
                max_attempts=config.enrichment.max_attempts,
                cooldown_seconds=config.enrichment.cooldown_seconds,
                sleep=sleep,
            ),
            sleep=sleep,
        )

        result = await CurationPipeline(config, source, enricher).run()

        counters = http_client.counters
        result.stats.requests_made = counters.requests_made
        result.stats.rate_limit_hits = counters.rate_limit_hits
        return result

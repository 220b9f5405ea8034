"""Per-repository metric enrichment.

Fetches the owner's commit count and the release count for each
repository that survived the basic filter. Requests are strictly
sequential and paced: the protected resource is the account's API
budget, so a multi-minute run is accepted in exchange for not tripping
the rate limit. Rate-limited requests get one retry after a cooldown;
any other failure skips the repository without aborting the run.
"""

import asyncio
import logging
from collections.abc import Callable

import httpx

from gh_showcase.config import EnrichmentConfig
from gh_showcase.curate.models import (
    EnrichedRepository,
    EnrichmentReport,
    Metrics,
    RawRepository,
    SkippedRepository,
)
from gh_showcase.github.http import GitHubHTTPError, SleepFn
from gh_showcase.github.rest import RestClient
from gh_showcase.github.retry import RetryPolicy

logger = logging.getLogger(__name__)


class MetricsEnricher:
    """Attach commit and release counts to repositories."""

    def __init__(
        self,
        rest: RestClient,
        account: str,
        config: EnrichmentConfig | None = None,
        retry_policy: RetryPolicy | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        """Initialize the enricher.

        Args:
            rest: REST client for the contributors and releases endpoints.
            account: Repository owner; its login is matched in contributor lists.
            config: Pacing, cooldown and fallback settings.
            retry_policy: Rate-limit retry policy. Built from ``config`` if None.
            sleep: Coroutine used for pacing delays.
        """
        self._rest = rest
        self._account = account
        self._config = config or EnrichmentConfig()
        self._sleep = sleep
        self._retry = retry_policy or RetryPolicy(
            max_attempts=self._config.max_attempts,
            cooldown_seconds=self._config.cooldown_seconds,
            sleep=sleep,
        )

    async def fetch_commit_count(self, repo: RawRepository) -> tuple[int, bool]:
        """Return the owner's contribution count for a repository.

        When the owner is not in the contributor list (commits under another
        email, empty repository) the configured fallback is returned instead
        of failing, flagged as estimated.

        Returns:
            Tuple of (commit count, estimated flag).

        Raises:
            GitHubHTTPError: If the request fails or stays rate limited.
        """
        contributors = await self._retry.run(
            lambda: self._rest.list_contributors(
                self._account, repo.name, per_page=self._config.per_page
            ),
            description=f"contributors of {repo.name}",
        )

        login = self._account.lower()
        for contributor in contributors:
            if str(contributor.get("login", "")).lower() == login:
                return int(contributor.get("contributions", 0)), False

        logger.debug(
            "%s not among contributors of %s, using fallback of %d commits",
            self._account,
            repo.name,
            self._config.fallback_commit_count,
        )
        return self._config.fallback_commit_count, True

    async def fetch_release_count(self, repo: RawRepository) -> int:
        """Return the number of releases; a 404 counts as zero.

        Raises:
            GitHubHTTPError: If the request fails or stays rate limited.
        """
        releases = await self._retry.run(
            lambda: self._rest.list_releases(
                self._account, repo.name, per_page=self._config.per_page
            ),
            description=f"releases of {repo.name}",
        )
        if releases is None:
            return 0
        return len(releases)

    async def enrich_one(self, repo: RawRepository) -> Metrics:
        """Fetch both metrics for one repository.

        Raises:
            GitHubHTTPError: If either request fails.
        """
        commit_count, estimated = await self.fetch_commit_count(repo)

        if self._config.request_delay_seconds > 0:
            await self._sleep(self._config.request_delay_seconds)

        release_count = await self.fetch_release_count(repo)
        return Metrics(
            commit_count=commit_count,
            release_count=release_count,
            commit_count_estimated=estimated,
        )

    async def enrich(
        self,
        repos: list[RawRepository],
        on_enriched: Callable[[EnrichedRepository], None] | None = None,
    ) -> EnrichmentReport:
        """Enrich repositories one after another.

        Args:
            repos: Repositories that passed the basic filter.
            on_enriched: Called with each result as soon as it is available.

        Returns:
            EnrichmentReport with enriched repositories in input order and
            the skipped ones with their reasons.
        """
        report = EnrichmentReport()
        total = len(repos)

        for index, repo in enumerate(repos):
            if index > 0 and self._config.pacing_seconds > 0:
                logger.debug("Waiting %.1fs before %s", self._config.pacing_seconds, repo.name)
                await self._sleep(self._config.pacing_seconds)

            logger.debug("[%d/%d] Enriching %s", index + 1, total, repo.name)

            try:
                metrics = await self.enrich_one(repo)
            except (GitHubHTTPError, httpx.HTTPError) as e:
                logger.warning("Skipping %s: %s", repo.name, e)
                report.skipped.append(SkippedRepository(name=repo.name, reason=str(e)))
                continue

            enriched = EnrichedRepository(repo=repo, metrics=metrics)
            report.enriched.append(enriched)
            if on_enriched is not None:
                on_enriched(enriched)

        logger.info(
            "Enriched %d of %d repositories (%d skipped)",
            len(report.enriched),
            total,
            len(report.skipped),
        )
        return report

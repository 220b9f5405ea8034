"""Repository source for a single GitHub account.

Fetches the candidate repository list (fatal on failure) and the pinned
repository set (best effort, degrades to empty).
"""

import logging

import httpx
from pydantic import ValidationError

from gh_showcase.curate.models import PinnedResult, RawRepository
from gh_showcase.github.graphql import GraphQLClient, GraphQLError
from gh_showcase.github.http import GitHubHTTPError
from gh_showcase.github.rest import MAX_PAGE_SIZE, RestClient

logger = logging.getLogger(__name__)


class RepoSourceError(Exception):
    """Raised when the primary repository listing cannot be obtained."""


class RepoSource:
    """Candidate repositories and pinned set for an account."""

    def __init__(
        self,
        rest: RestClient,
        graphql: GraphQLClient,
        per_page: int = MAX_PAGE_SIZE,
    ) -> None:
        """Initialize repository source.

        Args:
            rest: REST client used for the listing.
            graphql: GraphQL client used for pinned items.
            per_page: Listing page size; repositories beyond one page are not seen.
        """
        self._rest = rest
        self._graphql = graphql
        self._per_page = per_page

    async def list_repositories(self, account: str) -> list[RawRepository]:
        """List the account's repositories, most recently updated first.

        Args:
            account: GitHub username.

        Returns:
            Repositories sorted by ``updated_at`` descending.

        Raises:
            RepoSourceError: If the listing fails or returns malformed items.
        """
        try:
            payload = await self._rest.list_user_repos(account, per_page=self._per_page)
        except (GitHubHTTPError, httpx.HTTPError) as e:
            msg = f"Failed to fetch repositories for {account}: {e}"
            raise RepoSourceError(msg) from e

        try:
            repos = [RawRepository.from_api(item) for item in payload]
        except ValidationError as e:
            msg = f"Malformed repository listing for {account}: {e}"
            raise RepoSourceError(msg) from e

        repos.sort(key=lambda r: r.updated_at, reverse=True)
        logger.info("Fetched %d repositories for %s", len(repos), account)
        return repos

    async def list_pinned(self, account: str) -> PinnedResult:
        """Fetch the account's pinned repositories.

        Never raises for API failures; a failed fetch returns an empty,
        degraded result and logs a warning.

        Args:
            account: GitHub username.

        Returns:
            PinnedResult with lowercase names in profile order.
        """
        try:
            names = await self._graphql.query_pinned_repositories(account)
        except (GraphQLError, GitHubHTTPError, httpx.HTTPError) as e:
            logger.warning("Failed to fetch pinned repositories for %s: %s", account, e)
            return PinnedResult.degraded_from(e)

        result = PinnedResult.ok(names)
        logger.info("Found %d pinned repositories: %s", len(result), ", ".join(result.names))
        return result

"""GitHub REST API client for the endpoints the showcase needs.

Every listing is a single bounded page: the showcase targets one account
with at most a hundred repositories, so Link-header pagination is not
followed.
"""

import logging
from typing import Any, cast

from gh_showcase.github.http import GitHubClient, GitHubHTTPError, GitHubResponse

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class RestClient:
    """GitHub REST API client.

    Wraps GitHubClient to provide typed methods for the repository listing,
    contributors and releases endpoints.
    """

    def __init__(self, http_client: GitHubClient) -> None:
        """Initialize REST API client.

        Args:
            http_client: GitHubClient instance for HTTP requests.
        """
        self._http = http_client

    @staticmethod
    def _require_list(response: GitHubResponse, path: str) -> list[dict[str, Any]]:
        """Return the response payload as a list or raise.

        Raises:
            GitHubHTTPError: If the status is not 2xx or the payload is not a list.
        """
        if not response.is_success:
            logger.error("Request failed: GET %s - status %d", path, response.status_code)
            raise GitHubHTTPError(
                f"GitHub API responded with {response.status_code} for {path}",
                status_code=response.status_code,
            )

        if response.data is None:
            return []

        if not isinstance(response.data, list):
            raise GitHubHTTPError(
                f"Expected a JSON list from {path}, got {type(response.data).__name__}",
                status_code=response.status_code,
            )

        return cast("list[dict[str, Any]]", response.data)

    async def list_user_repos(
        self,
        username: str,
        per_page: int = MAX_PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        """List one page of a user's repositories, most recently updated first.

        Args:
            username: GitHub username.
            per_page: Page size, at most 100.

        Returns:
            Repository payloads as returned by GitHub.

        Raises:
            GitHubHTTPError: If the listing fails.
        """
        path = f"/users/{username}/repos"
        params = {
            "per_page": min(per_page, MAX_PAGE_SIZE),
            "sort": "updated",
            "direction": "desc",
        }

        logger.info("Fetching repositories for user: %s", username)
        response = await self._http.get(path, params=params)
        return self._require_list(response, path)

    async def list_contributors(
        self,
        owner: str,
        repo: str,
        per_page: int = MAX_PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        """List contributors of a repository with their contribution counts.

        Args:
            owner: Repository owner.
            repo: Repository name.
            per_page: Page size, at most 100.

        Returns:
            Contributor payloads (``login``, ``contributions``, ...). Empty
            repositories answer 204 and yield an empty list.

        Raises:
            GitHubHTTPError: If the request fails.
        """
        path = f"/repos/{owner}/{repo}/contributors"
        response = await self._http.get(path, params={"per_page": min(per_page, MAX_PAGE_SIZE)})
        return self._require_list(response, path)

    async def list_releases(
        self,
        owner: str,
        repo: str,
        per_page: int = MAX_PAGE_SIZE,
    ) -> list[dict[str, Any]] | None:
        """List releases of a repository.

        Args:
            owner: Repository owner.
            repo: Repository name.
            per_page: Page size, at most 100.

        Returns:
            Release payloads, or None when GitHub answers 404.

        Raises:
            GitHubHTTPError: If the request fails with any other status.
        """
        path = f"/repos/{owner}/{repo}/releases"
        response = await self._http.get(path, params={"per_page": min(per_page, MAX_PAGE_SIZE)})

        if response.is_not_found:
            logger.debug("Resource not found (404): %s", path)
            return None

        return self._require_list(response, path)

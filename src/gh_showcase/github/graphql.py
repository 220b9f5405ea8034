"""GitHub GraphQL API client.

Only used for data the REST API does not expose, currently the pinned
repositories of a user profile.
"""

import logging
from typing import Any, cast

from gh_showcase.github.http import GitHubClient

logger = logging.getLogger(__name__)


class GraphQLError(Exception):
    """Raised when GraphQL query returns errors."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        messages = [err.get("message", "Unknown error") for err in errors]
        super().__init__(f"GraphQL errors: {'; '.join(messages)}")


PINNED_REPOSITORIES_QUERY = """
query($login: String!, $first: Int = 6) {
  user(login: $login) {
    pinnedItems(first: $first, types: REPOSITORY) {
      nodes {
        ... on Repository {
          name
        }
      }
    }
  }
}
"""


class GraphQLClient:
    """GitHub GraphQL API client."""

    GRAPHQL_ENDPOINT = "/graphql"

    def __init__(self, http_client: GitHubClient) -> None:
        """Initialize GraphQL client.

        Args:
            http_client: GitHubClient instance for HTTP requests.
        """
        self._http = http_client

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a GraphQL query.

        Args:
            query: GraphQL query string.
            variables: Optional query variables.

        Returns:
            GraphQL response data payload.

        Raises:
            GraphQLError: If response contains GraphQL errors or a non-2xx status.
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        response = await self._http.post(self.GRAPHQL_ENDPOINT, json=payload)

        if not response.is_success:
            logger.error(
                "GraphQL request failed: status=%d, response=%s",
                response.status_code,
                response.data,
            )
            raise GraphQLError([{"message": f"HTTP {response.status_code}"}])

        if not isinstance(response.data, dict):
            raise GraphQLError([{"message": "Invalid GraphQL response format"}])

        if "errors" in response.data:
            errors = response.data["errors"]
            logger.error("GraphQL errors: %s", errors)
            raise GraphQLError(errors)

        data = response.data.get("data")
        if data is None:
            raise GraphQLError([{"message": "Missing data in GraphQL response"}])

        return cast("dict[str, Any]", data)

    async def query_pinned_repositories(self, login: str, first: int = 6) -> list[str]:
        """Query the names of a user's pinned repositories in profile order.

        Args:
            login: GitHub username.
            first: Maximum pinned items to return (GitHub allows six).

        Returns:
            Repository names as shown on the profile.

        Raises:
            GraphQLError: If the query fails or the user does not exist.
        """
        data = await self.execute(PINNED_REPOSITORIES_QUERY, {"login": login, "first": first})

        user = data.get("user")
        if user is None:
            raise GraphQLError([{"message": f"User not found: {login}"}])

        nodes = (user.get("pinnedItems") or {}).get("nodes") or []
        return [node["name"] for node in nodes if node and node.get("name")]

"""GitHub API clients and utilities."""

from gh_showcase.github.auth import AuthenticationError, GitHubAuth
from gh_showcase.github.graphql import GraphQLClient, GraphQLError
from gh_showcase.github.http import (
    GitHubClient,
    GitHubHTTPError,
    GitHubResponse,
    RequestCounters,
    RateLimitExceeded,
    RateLimitInfo,
)
from gh_showcase.github.rest import RestClient
from gh_showcase.github.retry import RetryPolicy

__all__ = [
    # Auth
    "AuthenticationError",
    "GitHubAuth",
    # HTTP Client
    "GitHubClient",
    "GitHubHTTPError",
    "GitHubResponse",
    # GraphQL Client
    "GraphQLClient",
    "GraphQLError",
    "RequestCounters",
    "RateLimitExceeded",
    "RateLimitInfo",
    # REST API Client
    "RestClient",
    # Retry
    "RetryPolicy",
]

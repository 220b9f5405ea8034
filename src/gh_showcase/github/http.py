"""GitHub HTTP client.

Thin async wrapper over httpx that adds the GitHub headers, retries
transient failures (timeouts, connection errors, 5xx) with exponential
backoff and turns rate-limit responses into RateLimitExceeded. The
rate-limit cooldown itself belongs to the caller (see ``retry.py``): the
client never waits out a rate limit on its own.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from gh_showcase import __version__
from gh_showcase.github.auth import GitHubAuth

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]

API_VERSION = "2022-11-28"


def _int_header(headers: httpx.Headers, name: str) -> int | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class RateLimitInfo(BaseModel):
    """Quota reported in the ``x-ratelimit-*`` response headers."""

    limit: int
    remaining: int
    reset: datetime
    used: int = 0
    resource: str = "core"

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0

    @classmethod
    def from_headers(cls, headers: httpx.Headers) -> Optional["RateLimitInfo"]:
        """Parse quota headers; None when the response carries none."""
        limit = _int_header(headers, "x-ratelimit-limit")
        if limit is None:
            return None

        return cls(
            limit=limit,
            remaining=_int_header(headers, "x-ratelimit-remaining") or 0,
            reset=datetime.fromtimestamp(_int_header(headers, "x-ratelimit-reset") or 0, tz=UTC),
            used=_int_header(headers, "x-ratelimit-used") or 0,
            resource=headers.get("x-ratelimit-resource", "core"),
        )


@dataclass
class GitHubResponse:
    """Decoded response handed back to the REST and GraphQL layers."""

    status_code: int
    data: Any
    headers: httpx.Headers
    rate_limit: RateLimitInfo | None = None
    url: str = ""
    retry_after: int | None = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def message(self) -> str:
        """The ``message`` field of a JSON error body, or an empty string."""
        if isinstance(self.data, dict):
            return str(self.data.get("message") or "")
        return ""

    @property
    def is_rate_limited(self) -> bool:
        """429, or a 403 that is a secondary limit or an exhausted quota.

        Secondary limits arrive either with ``retry-after`` or only with a
        "rate limit" message while quota remains. Any other 403 with quota
        left is a permission error, not throttling.
        """
        if self.status_code == 429:
            return True
        if self.status_code != 403:
            return False
        if self.retry_after is not None:
            return True
        if "rate limit" in self.message.lower():
            return True
        return self.rate_limit is not None and self.rate_limit.exhausted


@dataclass
class RequestCounters:
    """Per-client request accounting for the end-of-run summary."""

    requests_made: int = 0
    rate_limit_hits: int = 0
    last_rate_limit: RateLimitInfo | None = None

    def record(self, rate_limit: RateLimitInfo | None) -> None:
        self.requests_made += 1
        if rate_limit is not None:
            self.last_rate_limit = rate_limit

    def record_rate_limit_hit(self) -> None:
        self.rate_limit_hits += 1
        quota = self.last_rate_limit
        if quota is not None and quota.exhausted:
            logger.warning(
                "Rate limit of %d requests exhausted, resets at %s",
                quota.limit,
                quota.reset.isoformat(),
            )
        else:
            logger.warning("Throttled by GitHub (secondary rate limit)")


class GitHubHTTPError(Exception):
    """Request failed, or GitHub answered with an unusable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RateLimitExceeded(GitHubHTTPError):
    """Response signalled primary or secondary rate limiting."""

    def __init__(
        self,
        reset_at: datetime | None = None,
        retry_after: int | None = None,
        status_code: int = 429,
    ) -> None:
        self.reset_at = reset_at
        self.retry_after = retry_after
        if reset_at is not None:
            message = f"Rate limit exceeded. Resets at {reset_at.isoformat()}"
        elif retry_after is not None:
            message = f"Rate limit exceeded. Retry after {retry_after} seconds"
        else:
            message = "Rate limit exceeded"
        super().__init__(message, status_code=status_code)


class GitHubClient:
    """Async GitHub API client.

    Use as an async context manager so the underlying connection pool is
    closed at the end of the run.
    """

    BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0
    DEFAULT_MAX_RETRIES = 2
    INITIAL_BACKOFF = 1.0
    BACKOFF_MULTIPLIER = 2.0

    def __init__(
        self,
        auth: GitHubAuth | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_url: str = BASE_URL,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            auth: Credentials; anonymous unless the environment holds a token.
            timeout: Per-request timeout in seconds.
            max_retries: Retries for timeouts, network errors and 5xx responses.
            base_url: API root, overridable for GitHub Enterprise.
            sleep: Coroutine used for backoff waits.
        """
        self._auth = auth or GitHubAuth()
        self._timeout = timeout
        self._max_retries = max_retries
        self._base_url = base_url.rstrip("/")
        self._sleep = sleep

        self._client: httpx.AsyncClient | None = None
        self._counters = RequestCounters()

    @property
    def counters(self) -> RequestCounters:
        return self._counters

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": f"gh-showcase/{__version__}",
            **self._auth.get_authorization_header(),
        }

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._headers(),
                follow_redirects=True,
            )
        return self._client

    def backoff_delay(self, retry: int) -> float:
        """Seconds to wait before retry number ``retry`` (0-based)."""
        return self.INITIAL_BACKOFF * self.BACKOFF_MULTIPLIER**retry

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request, retrying transient failures.

        Raises:
            GitHubHTTPError: When retries are exhausted.
        """
        client = self._http()
        retry = 0

        while True:
            logger.debug("%s %s (attempt %d)", method, path, retry + 1)
            try:
                response = await client.request(method, path, **kwargs)
            except httpx.TimeoutException as e:
                cause: Exception | None = e
                failure = GitHubHTTPError(f"Request timeout for {method} {path}: {e}")
            except httpx.NetworkError as e:
                cause = e
                failure = GitHubHTTPError(f"Network error for {method} {path}: {e}")
            else:
                cause = None
                if response.status_code < 500:
                    return response
                failure = GitHubHTTPError(
                    f"Server error {response.status_code} for {method} {path} "
                    f"after {retry} retries",
                    status_code=response.status_code,
                )

            if retry >= self._max_retries:
                raise failure from cause

            delay = self.backoff_delay(retry)
            logger.warning("%s; retrying in %.0fs", failure, delay)
            await self._sleep(delay)
            retry += 1

    async def request(self, method: str, path: str, **kwargs: Any) -> GitHubResponse:
        """Make a request and decode the JSON body.

        Non-2xx responses other than rate limits are returned, so callers
        decide whether, for example, a 404 is data or an error.

        Args:
            method: HTTP method.
            path: API path, e.g. ``/users/octocat/repos``.
            **kwargs: Passed through to httpx (``params``, ``json``, ...).

        Returns:
            GitHubResponse with the decoded body.

        Raises:
            GitHubHTTPError: If the request fails after retries.
            RateLimitExceeded: If the response signals rate limiting.
        """
        response = await self._send(method, path, **kwargs)

        rate_limit = RateLimitInfo.from_headers(response.headers)
        self._counters.record(rate_limit)

        data: Any = None
        if response.content:
            try:
                data = response.json()
            except ValueError:
                logger.warning("Non-JSON body from %s %s", method, path)
                data = response.text

        result = GitHubResponse(
            status_code=response.status_code,
            data=data,
            headers=response.headers,
            rate_limit=rate_limit,
            url=str(response.url),
            retry_after=_int_header(response.headers, "retry-after"),
        )

        if result.is_rate_limited:
            self._counters.record_rate_limit_hit()
            raise RateLimitExceeded(
                reset_at=rate_limit.reset if rate_limit and rate_limit.exhausted else None,
                retry_after=result.retry_after,
                status_code=response.status_code,
            )

        return result

    async def get(self, path: str, **kwargs: Any) -> GitHubResponse:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> GitHubResponse:
        return await self.request("POST", path, **kwargs)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitHubClient":
        self._http()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

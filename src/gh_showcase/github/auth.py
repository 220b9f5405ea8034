"""GitHub authentication module.

Loads an optional GitHub token from the environment. The REST endpoints
used here are public, so a missing token lowers the rate limit and makes
the pinned-items GraphQL query fail (which the pipeline tolerates).
"""

import logging
import os
import re

from gh_showcase.logging import register_secret

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when a supplied token is malformed."""


class GitHubAuth:
    """Optional bearer credential for the GitHub API.

    An explicit token wins over the environment variable. Accepted shapes are
    the prefixed tokens in ``VALID_PREFIXES`` and 40-character hex classic
    tokens. A loaded token is registered with the log redaction filter.
    """

    VALID_PREFIXES = ("ghp_", "gho_", "ghu_", "ghs_", "github_pat_")

    CLASSIC_TOKEN_PATTERN = re.compile(r"^[a-f0-9]{40}$")

    def __init__(self, token: str | None = None, token_env: str = "GITHUB_TOKEN") -> None:
        """Initialize GitHub authentication.

        Args:
            token: GitHub token. If None, loads from ``token_env``.
            token_env: Environment variable holding the token.

        Raises:
            AuthenticationError: If a token is present but invalid.
        """
        loaded_token = token or os.environ.get(token_env, "").strip() or None

        if loaded_token is None:
            logger.info(
                "No token in %s, using unauthenticated requests (60 requests/hour)", token_env
            )
        else:
            logger.info("Using GitHub token from %s", "explicit parameter" if token else token_env)

        self._token: str | None = loaded_token
        if self._token is not None:
            self._validate_token()
            register_secret(self._token)

    def _validate_token(self) -> None:
        """Validate token format.

        Raises:
            AuthenticationError: If token format is invalid.
        """
        token = self._token or ""

        has_valid_prefix = any(token.startswith(prefix) for prefix in self.VALID_PREFIXES)
        is_classic = bool(self.CLASSIC_TOKEN_PATTERN.match(token))

        if not has_valid_prefix and not is_classic:
            raise AuthenticationError(
                f"Invalid token format. Expected prefix {self.VALID_PREFIXES} "
                "or 40-character hex string (classic token)"
            )

        if has_valid_prefix and len(token) < 20:
            raise AuthenticationError("Token appears too short to be valid")

    @property
    def token(self) -> str | None:
        """Get the GitHub token, or None when running anonymously."""
        return self._token

    @property
    def is_authenticated(self) -> bool:
        """Whether requests carry a credential."""
        return self._token is not None

    def get_authorization_header(self) -> dict[str, str]:
        """Get the Authorization header for API requests.

        Returns:
            Dictionary with the bearer Authorization header, empty when anonymous.
        """
        if self._token is None:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

"""Tests for GitHub authentication module."""

import pytest

from gh_showcase.github.auth import AuthenticationError, GitHubAuth


class TestGitHubAuthValidTokens:
    """Tests for GitHubAuth initialization with valid tokens."""

    def test_valid_ghp_token(self) -> None:
        """Test initialization with valid ghp_ prefix token."""
        token = "ghp_" + "a" * 36
        auth = GitHubAuth(token=token)
        assert auth.token == token
        assert auth.is_authenticated is True

    def test_valid_fine_grained_token(self) -> None:
        """Test initialization with a fine-grained github_pat_ token."""
        token = "github_pat_" + "B" * 40
        auth = GitHubAuth(token=token)
        assert auth.token == token

    def test_valid_classic_token(self) -> None:
        """Test initialization with valid classic token (40 hex chars)."""
        token = "abc123def456abc789def012abc345def6789abc"
        auth = GitHubAuth(token=token)
        assert auth.token == token


class TestGitHubAuthInvalidTokens:
    """Tests for GitHubAuth initialization with invalid tokens."""

    def test_invalid_prefix(self) -> None:
        """Test that unknown token formats are rejected."""
        with pytest.raises(AuthenticationError, match="Invalid token format"):
            GitHubAuth(token="not-a-github-token")

    def test_prefixed_token_too_short(self) -> None:
        """Test that a prefixed token shorter than 20 chars is rejected."""
        with pytest.raises(AuthenticationError, match="too short"):
            GitHubAuth(token="ghp_short")


class TestGitHubAuthEnvironment:
    """Tests for loading tokens from the environment."""

    def test_loads_from_default_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test token is read from GITHUB_TOKEN."""
        token = "ghp_" + "e" * 36
        monkeypatch.setenv("GITHUB_TOKEN", token)
        assert GitHubAuth().token == token

    def test_loads_from_custom_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test token is read from a configured variable."""
        token = "ghp_" + "f" * 36
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.setenv("SHOWCASE_TOKEN", token)
        assert GitHubAuth(token_env="SHOWCASE_TOKEN").token == token

    def test_explicit_token_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test explicit token takes precedence over the environment."""
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_" + "1" * 36)
        explicit = "ghp_" + "2" * 36
        assert GitHubAuth(token=explicit).token == explicit

    def test_missing_token_is_anonymous(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a missing token yields anonymous auth instead of an error."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        auth = GitHubAuth()
        assert auth.token is None
        assert auth.is_authenticated is False
        assert auth.get_authorization_header() == {}

    def test_blank_env_token_is_anonymous(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test whitespace in the variable counts as no token."""
        monkeypatch.setenv("GITHUB_TOKEN", "   ")
        assert GitHubAuth().token is None


class TestAuthorizationHeader:
    """Tests for header generation."""

    def test_bearer_header(self) -> None:
        """Test the header uses the bearer scheme."""
        token = "ghp_" + "c" * 36
        auth = GitHubAuth(token=token)
        assert auth.get_authorization_header() == {"Authorization": f"Bearer {token}"}

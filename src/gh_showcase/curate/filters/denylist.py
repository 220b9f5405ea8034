"""Denylist filter for repositories that are not projects."""

from gh_showcase.config import FilterConfig
from gh_showcase.curate.models import RawRepository

from .base import BaseFilter, FilterResult


class DenylistFilter(BaseFilter):
    """Exclude repositories listed by name in the configuration.

    Used for the profile README repository, Homebrew taps and vendored
    forks that GitHub does not flag as forks. Names compare case-insensitively.
    """

    name = "denylist"

    def is_enabled(self, config: FilterConfig) -> bool:
        """Enabled when the denylist is non-empty."""
        return bool(config.denylist)

    def evaluate(self, repo: RawRepository, config: FilterConfig) -> FilterResult:
        """Reject denylisted names."""
        if repo.name.lower() in config.denylist:
            return self._reject(f"Repository {repo.name} is denylisted")
        return self._accept()

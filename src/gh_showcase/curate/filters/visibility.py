"""Visibility filter."""

from gh_showcase.config import FilterConfig
from gh_showcase.curate.models import RawRepository

from .base import BaseFilter, FilterResult


class VisibilityFilter(BaseFilter):
    """Exclude private repositories. Always enabled.

    A token with repo scope lists private repositories too.
    """

    name = "visibility"

    def evaluate(self, repo: RawRepository, config: FilterConfig) -> FilterResult:  # noqa: ARG002
        """Reject private repositories."""
        if repo.private:
            return self._reject("Repository is private")
        return self._accept()

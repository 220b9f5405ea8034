"""Fork status filter."""

from gh_showcase.config import FilterConfig
from gh_showcase.curate.models import RawRepository

from .base import BaseFilter, FilterResult


class ForkFilter(BaseFilter):
    """Exclude forked repositories. Always enabled."""

    name = "fork"

    def evaluate(self, repo: RawRepository, config: FilterConfig) -> FilterResult:  # noqa: ARG002
        """Reject forks."""
        if repo.fork:
            return self._reject("Repository is a fork")
        return self._accept()

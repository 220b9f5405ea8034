"""Description presence filter."""

from gh_showcase.config import FilterConfig
from gh_showcase.curate.models import RawRepository

from .base import BaseFilter, FilterResult


class DescriptionFilter(BaseFilter):
    """Exclude repositories without a description."""

    name = "description"

    def is_enabled(self, config: FilterConfig) -> bool:
        """Enabled by ``require_description``."""
        return config.require_description

    def evaluate(self, repo: RawRepository, config: FilterConfig) -> FilterResult:  # noqa: ARG002
        """Reject empty or whitespace-only descriptions."""
        if not repo.description.strip():
            return self._reject("Repository has no description")
        return self._accept()

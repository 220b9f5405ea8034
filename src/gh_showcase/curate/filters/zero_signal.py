"""Zero-signal filter."""

from gh_showcase.config import FilterConfig
from gh_showcase.curate.models import RawRepository

from .base import BaseFilter, FilterResult


class SignalFilter(BaseFilter):
    """Exclude repositories with no stars, no topics and no language.

    Dead repositories must not consume rate-limited enrichment calls.
    """

    name = "signal"

    def is_enabled(self, config: FilterConfig) -> bool:
        """Enabled by ``require_signal``."""
        return config.require_signal

    def evaluate(self, repo: RawRepository, config: FilterConfig) -> FilterResult:  # noqa: ARG002
        """Reject repositories without any signal."""
        if not repo.has_signal:
            return self._reject("Repository has no stars, topics or language")
        return self._accept()

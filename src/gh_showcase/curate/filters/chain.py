"""Filter chain applied to the repository listing before enrichment."""

import logging
from collections import defaultdict

from gh_showcase.config import FilterConfig
from gh_showcase.curate.models import RawRepository

from .base import BaseFilter, FilterResult
from .denylist import DenylistFilter
from .description import DescriptionFilter
from .fork import ForkFilter
from .visibility import VisibilityFilter
from .zero_signal import SignalFilter

logger = logging.getLogger(__name__)


class FilterChain:
    """Composable filter chain for the basic, network-free exclusion pass.

    Evaluates filters in order, short-circuits on the first rejection and
    tracks rejection statistics per filter.
    """

    def __init__(self, config: FilterConfig, filters: list[BaseFilter] | None = None) -> None:
        """Initialize filter chain.

        Args:
            config: Filter configuration.
            filters: Filters to apply, in order. Defaults to the standard chain.
        """
        self.config = config
        self.stats: dict[str, int] = defaultdict(int)

        self.filters: list[BaseFilter] = filters or [
            ForkFilter(),
            VisibilityFilter(),
            DenylistFilter(),
            DescriptionFilter(),
            SignalFilter(),
        ]

    def evaluate(self, repo: RawRepository) -> FilterResult:
        """Evaluate all enabled filters for a repository.

        Short-circuits on first failure.

        Args:
            repo: Repository from the account listing.

        Returns:
            FilterResult with pass/fail and rejection reason.
        """
        for filter_obj in self.filters:
            if not filter_obj.is_enabled(self.config):
                continue

            result = filter_obj.evaluate(repo, self.config)
            if not result.passed:
                return result

        return FilterResult(passed=True, filter_name="none")

    def apply(self, repos: list[RawRepository]) -> list[RawRepository]:
        """Return the repositories that pass every filter, preserving order.

        Rejections are recorded in ``stats`` and each one is logged.
        """
        passed: list[RawRepository] = []
        for repo in repos:
            result = self.evaluate(repo)
            if result.passed:
                passed.append(repo)
            else:
                self.record_rejection(result.filter_name)
                logger.info("excluded %s: %s", repo.name, result.reason)

        logger.info(
            "Basic filter kept %d of %d repositories (rejected: %s)",
            len(passed),
            len(repos),
            self.get_stats() or "none",
        )
        return passed

    def record_rejection(self, filter_name: str) -> None:
        """Record a filter rejection for statistics.

        Args:
            filter_name: Name of the filter that rejected the repo.
        """
        self.stats[filter_name] += 1

    def get_stats(self) -> dict[str, int]:
        """Get filter rejection statistics.

        Returns:
            Dictionary mapping filter names to rejection counts.
        """
        return dict(self.stats)

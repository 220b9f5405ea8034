"""Base filter interface for repository filtering."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from gh_showcase.config import FilterConfig
from gh_showcase.curate.models import RawRepository


@dataclass
class FilterResult:
    """Result of a filter evaluation.

    Attributes:
        passed: Whether the repository passed the filter.
        reason: Optional reason for rejection (None if passed).
        filter_name: Name of the filter that produced this result.
    """

    passed: bool
    reason: str | None = None
    filter_name: str = ""


class BaseFilter(ABC):
    """Abstract base class for repository filters.

    Filters run before enrichment and must not touch the network.
    """

    name: str = "base"

    def is_enabled(self, config: FilterConfig) -> bool:  # noqa: ARG002
        """Check if this filter is enabled in the configuration.

        Args:
            config: FilterConfig object.

        Returns:
            True if the filter should be applied.
        """
        return True

    @abstractmethod
    def evaluate(self, repo: RawRepository, config: FilterConfig) -> FilterResult:
        """Evaluate a repository against this filter.

        Args:
            repo: Repository from the account listing.
            config: FilterConfig object.

        Returns:
            FilterResult indicating pass/fail with optional reason.
        """

    def _reject(self, reason: str) -> FilterResult:
        return FilterResult(passed=False, reason=reason, filter_name=self.name)

    def _accept(self) -> FilterResult:
        return FilterResult(passed=True, filter_name=self.name)

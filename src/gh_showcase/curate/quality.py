"""Catalog admission gate.

Decides whether an enriched repository is listed at all. Stars play no
part here; they only feed featured ranking.
"""

from gh_showcase.config import QualityConfig
from gh_showcase.curate.filters.base import FilterResult
from gh_showcase.curate.models import EnrichedRepository


class QualityGate:
    """Commit floor plus release requirement."""

    name = "quality"

    def __init__(self, config: QualityConfig | None = None) -> None:
        self.config = config or QualityConfig()

    def evaluate(self, enriched: EnrichedRepository) -> FilterResult:
        """Evaluate an enriched repository against the thresholds.

        Args:
            enriched: Repository with its metrics.

        Returns:
            FilterResult; the reason names the first unmet threshold.
        """
        metrics = enriched.metrics

        if metrics.commit_count < self.config.min_commits:
            return FilterResult(
                passed=False,
                reason=f"{metrics.commit_count} commits < {self.config.min_commits}",
                filter_name=self.name,
            )

        if metrics.release_count < self.config.min_releases:
            return FilterResult(
                passed=False,
                reason=f"{metrics.release_count} releases < {self.config.min_releases}",
                filter_name=self.name,
            )

        return FilterResult(passed=True, filter_name=self.name)

    def admits(self, enriched: EnrichedRepository) -> bool:
        """Return True if the repository qualifies for the catalog."""
        return self.evaluate(enriched).passed

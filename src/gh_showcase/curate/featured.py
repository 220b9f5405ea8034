"""Featured project selection.

Picks a bounded, category-diverse subset of the catalog for prominent
display. Pinned projects come first in profile order; the rest are
ranked by score and taken round-robin by category so that one prolific
category cannot crowd out the others.
"""

import logging
from collections import defaultdict

from gh_showcase.config import FeaturedConfig
from gh_showcase.curate.models import PinnedResult, Project

logger = logging.getLogger(__name__)


class FeaturedSelector:
    """Rank and select featured projects."""

    def __init__(self, config: FeaturedConfig | None = None) -> None:
        self.config = config or FeaturedConfig()

    def is_featurable(self, project: Project) -> bool:
        """Secondary quality bar, stricter than the catalog gate."""
        return (
            project.commit_count >= self.config.min_commits
            or project.stars >= self.config.min_stars
        )

    def score(self, project: Project) -> float:
        """Weighted score; stars outweigh commits."""
        return (
            project.stars * self.config.star_weight
            + project.commit_count * self.config.commit_weight
        )

    def rank(self, projects: list[Project]) -> list[Project]:
        """Sort by score, then most recently updated, then id."""
        by_id = sorted(projects, key=lambda p: p.id)
        by_recency = sorted(by_id, key=lambda p: p.updated_at, reverse=True)
        return sorted(by_recency, key=self.score, reverse=True)

    def category_order(self, categories: set[str]) -> list[str]:
        """Alphabetical, with the catch-all category last."""
        catch_all = self.config.catch_all_category
        ordered = sorted(c for c in categories if c != catch_all)
        if catch_all in categories:
            ordered.append(catch_all)
        return ordered

    def _category_limit(self, category: str) -> int:
        if category == self.config.catch_all_category:
            return self.config.catch_all_per_category
        return self.config.per_category

    def select(self, projects: list[Project], pinned: PinnedResult) -> list[Project]:
        """Select featured projects.

        Args:
            projects: Qualifying catalog projects, in any order.
            pinned: Pinned repository names from the profile.

        Returns:
            At most ``max_projects`` unique projects, pinned ones first.
        """
        cap = self.config.max_projects
        eligible = [p for p in projects if self.is_featurable(p)]

        by_id = {p.id: p for p in eligible}
        pinned_projects = [by_id[name] for name in pinned.names if name in by_id]
        pinned_ids = {p.id for p in pinned_projects}
        ranked = self.rank([p for p in eligible if p.id not in pinned_ids])

        selected: list[Project] = list(pinned_projects)
        emitted = set(pinned_ids)

        by_category: dict[str, list[Project]] = defaultdict(list)
        for project in ranked:
            by_category[project.category].append(project)

        for category in self.category_order(set(by_category)):
            if len(selected) >= cap:
                break
            taken = 0
            for project in by_category[category]:
                if taken >= self._category_limit(category) or len(selected) >= cap:
                    break
                if project.id in emitted:
                    continue
                selected.append(project)
                emitted.add(project.id)
                taken += 1

        if self.config.backfill:
            for project in ranked:
                if len(selected) >= cap:
                    break
                if project.id not in emitted:
                    selected.append(project)
                    emitted.add(project.id)

        logger.info(
            "Selected %d featured projects (%d pinned) from %d eligible of %d qualifying",
            min(len(selected), cap),
            len(pinned_projects),
            len(eligible),
            len(projects),
        )
        return selected[:cap]

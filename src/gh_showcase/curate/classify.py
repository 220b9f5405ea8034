"""Heuristic classification of repositories into published projects."""

from gh_showcase.curate.models import UNKNOWN_LANGUAGE, EnrichedRepository, Project, RawRepository
from gh_showcase.curate.rules import DEFAULT_RULES, ClassifierRules, RepoFacts


def _capitalize_topic(topic: str) -> str:
    return topic[:1].upper() + topic[1:]


class Classifier:
    """Derive category, platforms and highlights from repository metadata.

    Stateless: the same repository always yields the same result.
    """

    def __init__(
        self,
        rules: ClassifierRules = DEFAULT_RULES,
        max_highlights: int = 3,
        max_topic_highlights: int = 2,
    ) -> None:
        """Initialize the classifier.

        Args:
            rules: Category, platform and highlight tables.
            max_highlights: Highlight list is truncated to this length.
            max_topic_highlights: Leading topics considered for backfill.
        """
        self.rules = rules
        self.max_highlights = max_highlights
        self.max_topic_highlights = max_topic_highlights

    def categorize(self, repo: RawRepository) -> str:
        """Return the category of the first matching rule."""
        facts = RepoFacts.from_repo(repo)
        for rule in self.rules.categories:
            if rule.matches(facts):
                return rule.category
        return self.rules.fallback_category

    def platforms(self, repo: RawRepository) -> list[str]:
        """Return the platforms of the first matching rule, deduplicated.

        Empty when no rule matches.
        """
        facts = RepoFacts.from_repo(repo)
        for rule in self.rules.platforms:
            if rule.matches(facts):
                return list(dict.fromkeys(rule.resolve(facts)))
        return []

    def highlights(self, repo: RawRepository) -> list[str]:
        """Return up to ``max_highlights`` labels, keyword rules before topics."""
        facts = RepoFacts.from_repo(repo)
        highlights: list[str] = []
        seen: set[str] = set()

        def add(label: str) -> None:
            if label.lower() not in seen:
                seen.add(label.lower())
                highlights.append(label)

        for rule in self.rules.highlights:
            if rule.matches(facts):
                add(rule.label)

        for topic in repo.topics[: self.max_topic_highlights]:
            add(_capitalize_topic(topic))

        return highlights[: self.max_highlights]

    def classify(self, enriched: EnrichedRepository) -> Project:
        """Build the published Project for a qualifying repository."""
        repo = enriched.repo
        return Project(
            id=repo.name.lower(),
            name=repo.name,
            description=repo.description,
            language=repo.language or UNKNOWN_LANGUAGE,
            platforms=self.platforms(repo),
            stars=repo.stars,
            github_url=repo.html_url,
            category=self.categorize(repo),
            highlights=self.highlights(repo),
            updated_at=repo.updated_at,
            created_at=repo.created_at,
            topics=list(repo.topics),
            commit_count=enriched.metrics.commit_count,
            release_count=enriched.metrics.release_count,
            homepage_url=repo.homepage,
        )

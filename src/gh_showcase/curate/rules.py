"""Heuristic rule tables for repository classification.

Rules are plain data so each one can be tested on its own and a
different account can ship its own tables. Matching is done against
``RepoFacts``: the lowercased name, description and topics plus the
language exactly as GitHub reports it.
"""

import re
from dataclasses import dataclass, field

from gh_showcase.curate.models import RawRepository


@dataclass(frozen=True)
class RepoFacts:
    """Normalized view of a repository used by every rule."""

    name: str
    description: str
    language: str | None
    topics: tuple[str, ...]

    @classmethod
    def from_repo(cls, repo: RawRepository) -> "RepoFacts":
        return cls(
            name=repo.name.lower(),
            description=repo.description.lower(),
            language=repo.language,
            topics=tuple(topic.lower() for topic in repo.topics),
        )


@dataclass(frozen=True)
class KeywordMatch:
    """Keyword tests; a match on any one of them counts.

    Attributes:
        name: Substrings searched in the repository name.
        description: Substrings searched in the description.
        words: Whole words searched in the description.
        topics: Exact topic tags.
    """

    name: tuple[str, ...] = ()
    description: tuple[str, ...] = ()
    words: tuple[str, ...] = ()
    topics: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.name or self.description or self.words or self.topics)

    def matches(self, facts: RepoFacts) -> bool:
        if any(keyword in facts.name for keyword in self.name):
            return True
        if any(keyword in facts.description for keyword in self.description):
            return True
        if any(re.search(rf"\b{re.escape(word)}\b", facts.description) for word in self.words):
            return True
        return any(topic in facts.topics for topic in self.topics)


@dataclass(frozen=True)
class CategoryRule:
    """Category assigned when the language matches AND a keyword matches.

    An empty ``languages`` accepts any language; empty ``keywords`` accepts
    any repository in one of ``languages``.
    """

    category: str
    languages: tuple[str, ...] = ()
    keywords: KeywordMatch = field(default_factory=KeywordMatch)

    def matches(self, facts: RepoFacts) -> bool:
        if self.languages and facts.language not in self.languages:
            return False
        if self.keywords.is_empty:
            return bool(self.languages)
        return self.keywords.matches(facts)


@dataclass(frozen=True)
class HighlightRule:
    """Highlight label; same language-AND-keyword semantics as CategoryRule."""

    label: str
    languages: tuple[str, ...] = ()
    keywords: KeywordMatch = field(default_factory=KeywordMatch)

    def matches(self, facts: RepoFacts) -> bool:
        if self.languages and facts.language not in self.languages:
            return False
        return self.keywords.matches(facts)


@dataclass(frozen=True)
class PlatformRule:
    """Platforms implied when the language OR a keyword matches.

    Attributes:
        platforms: Platforms always added on match.
        refinements: (description substring, platform) pairs added on top.
    """

    platforms: tuple[str, ...]
    languages: tuple[str, ...] = ()
    keywords: KeywordMatch = field(default_factory=KeywordMatch)
    refinements: tuple[tuple[str, str], ...] = ()

    def matches(self, facts: RepoFacts) -> bool:
        if facts.language is not None and facts.language in self.languages:
            return True
        return self.keywords.matches(facts)

    def resolve(self, facts: RepoFacts) -> list[str]:
        resolved = list(self.platforms)
        resolved.extend(
            platform for keyword, platform in self.refinements if keyword in facts.description
        )
        return resolved


@dataclass(frozen=True)
class ClassifierRules:
    """Complete rule set; each table is evaluated top to bottom."""

    categories: tuple[CategoryRule, ...]
    fallback_category: str
    platforms: tuple[PlatformRule, ...]
    highlights: tuple[HighlightRule, ...]


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule("CLI Tools", keywords=KeywordMatch(name=("-cli",), description=("cli",))),
    CategoryRule(
        "Swift Packages",
        languages=("Swift",),
        keywords=KeywordMatch(name=("kit",), description=("package",)),
    ),
    CategoryRule(
        "Desktop Apps",
        keywords=KeywordMatch(description=("gtk", "desktop", "app")),
    ),
    CategoryRule("Swift Projects", languages=("Swift",)),
    CategoryRule("Go Projects", languages=("Go",)),
)

FALLBACK_CATEGORY = "Other Projects"

ALL_DESKTOP = ("macOS", "Linux", "Windows")

PLATFORM_RULES: tuple[PlatformRule, ...] = (
    PlatformRule(
        ("macOS",),
        languages=("Swift",),
        keywords=KeywordMatch(description=("swift",)),
        refinements=(("linux", "Linux"), ("ios", "iOS")),
    ),
    PlatformRule(ALL_DESKTOP, languages=("Go",), keywords=KeywordMatch(name=("-cli",))),
    PlatformRule(("Linux",), keywords=KeywordMatch(description=("gtk", "linux"))),
    PlatformRule(ALL_DESKTOP, keywords=KeywordMatch(description=("cross-platform",))),
)

HIGHLIGHT_RULES: tuple[HighlightRule, ...] = (
    HighlightRule(
        "Homebrew available",
        keywords=KeywordMatch(description=("homebrew",), topics=("homebrew",)),
    ),
    HighlightRule(
        "Cross-platform",
        keywords=KeywordMatch(description=("cross-platform", "linux", "macos")),
    ),
    HighlightRule("Well-tested", keywords=KeywordMatch(description=("test",), topics=("testing",))),
    HighlightRule(
        "AI-powered",
        keywords=KeywordMatch(description=("openai", "dalle"), words=("ai", "ml")),
    ),
    HighlightRule("GTK4", keywords=KeywordMatch(description=("gtk",))),
    HighlightRule("async/await", keywords=KeywordMatch(description=("async",))),
    HighlightRule("Vim controls", keywords=KeywordMatch(description=("vim",))),
    HighlightRule("Zero dependencies", keywords=KeywordMatch(description=("zero dependencies",))),
    HighlightRule("Batch generation", keywords=KeywordMatch(description=("batch",))),
    HighlightRule(
        "Cross-platform Swift",
        languages=("Swift",),
        keywords=KeywordMatch(description=("linux",)),
    ),
)

DEFAULT_RULES = ClassifierRules(
    categories=CATEGORY_RULES,
    fallback_category=FALLBACK_CATEGORY,
    platforms=PLATFORM_RULES,
    highlights=HIGHLIGHT_RULES,
)

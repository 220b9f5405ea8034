"""Data models for the curation pipeline.

RawRepository is what the listing endpoint returns, Metrics is what
enrichment adds, and Project is the published record. Snapshot is the
document the static site reads.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNKNOWN_LANGUAGE = "Unknown"


class RawRepository(BaseModel):
    """Repository as returned by the account listing."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str = ""
    language: str | None = None
    fork: bool = False
    private: bool = False
    stars: int = Field(default=0, ge=0)
    html_url: str = ""
    homepage: str | None = None
    topics: tuple[str, ...] = ()
    created_at: datetime
    updated_at: datetime

    @property
    def kind(self) -> str:
        """Return "fork" or "origin"."""
        return "fork" if self.fork else "origin"

    @property
    def has_signal(self) -> bool:
        """Whether the repository has stars, topics or a detected language."""
        return self.stars > 0 or bool(self.topics) or bool(self.language)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "RawRepository":
        """Build from a REST ``/users/{user}/repos`` item.

        Args:
            payload: Repository dictionary from GitHub.

        Returns:
            RawRepository with empty strings normalized to None where optional.

        Raises:
            pydantic.ValidationError: If required fields are missing or malformed.
        """
        return cls(
            name=payload.get("name") or "",
            description=payload.get("description") or "",
            language=payload.get("language") or None,
            fork=bool(payload.get("fork", False)),
            private=bool(payload.get("private", False)),
            stars=payload.get("stargazers_count") or 0,
            html_url=payload.get("html_url") or "",
            homepage=payload.get("homepage") or None,
            topics=tuple(payload.get("topics") or ()),
            created_at=payload.get("created_at"),
            updated_at=payload.get("updated_at"),
        )


@dataclass(frozen=True)
class Metrics:
    """Enrichment result for one repository.

    Attributes:
        commit_count: Contributions attributed to the account owner.
        release_count: Number of published releases.
        commit_count_estimated: True when the owner was missing from the
            contributor list and the fallback count was substituted.
    """

    commit_count: int
    release_count: int
    commit_count_estimated: bool = False

    def __post_init__(self) -> None:
        if self.commit_count < 0 or self.release_count < 0:
            msg = "Metric counts must be non-negative"
            raise ValueError(msg)


@dataclass(frozen=True)
class EnrichedRepository:
    """A repository paired with its metrics."""

    repo: RawRepository
    metrics: Metrics


@dataclass(frozen=True)
class SkippedRepository:
    """A repository dropped during enrichment and why."""

    name: str
    reason: str


@dataclass(frozen=True)
class PinnedResult:
    """Pinned repository names, or an empty degraded result on failure.

    Names are lowercased and kept in profile order.
    """

    names: tuple[str, ...] = ()
    cause: str | None = None

    @property
    def degraded(self) -> bool:
        """Whether the pinned fetch failed."""
        return self.cause is not None

    @classmethod
    def ok(cls, names: list[str] | tuple[str, ...]) -> "PinnedResult":
        """Successful fetch; lowercases and de-duplicates in order."""
        return cls(names=tuple(dict.fromkeys(name.lower() for name in names)))

    @classmethod
    def degraded_from(cls, error: BaseException | str) -> "PinnedResult":
        """Failed fetch, carrying the cause for logging."""
        return cls(names=(), cause=str(error) or type(error).__name__)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, str) and item.lower() in self.names

    def __len__(self) -> int:
        return len(self.names)


class Project(BaseModel):
    """Published, curated repository record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: str = Field(min_length=1)
    name: str
    description: str
    language: str = UNKNOWN_LANGUAGE
    platforms: list[str] = Field(default_factory=list)
    stars: int = Field(default=0, ge=0)
    github_url: str = ""
    category: str = Field(min_length=1)
    highlights: list[str] = Field(default_factory=list, max_length=3)
    updated_at: datetime
    created_at: datetime
    topics: list[str] = Field(default_factory=list)
    commit_count: int = Field(default=0, ge=0)
    release_count: int = Field(default=0, ge=0)
    homepage_url: str | None = None

    @field_validator("platforms")
    @classmethod
    def validate_platforms(cls, v: list[str]) -> list[str]:
        """Platforms must not repeat."""
        if len(set(v)) != len(v):
            msg = f"Duplicate platforms: {v}"
            raise ValueError(msg)
        return v

    @field_validator("highlights")
    @classmethod
    def validate_highlights(cls, v: list[str]) -> list[str]:
        """Highlights must be unique ignoring case."""
        if len({h.lower() for h in v}) != len(v):
            msg = f"Duplicate highlights: {v}"
            raise ValueError(msg)
        return v


class Snapshot(BaseModel):
    """Featured-projects document consumed by the static site."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    last_updated: datetime
    total_repos: int = Field(ge=0)
    projects: list[Project] = Field(default_factory=list)

    @field_validator("projects")
    @classmethod
    def validate_unique_projects(cls, v: list[Project]) -> list[Project]:
        """Each project appears at most once."""
        ids = [project.id for project in v]
        if len(set(ids)) != len(ids):
            msg = "Snapshot projects must be unique by id"
            raise ValueError(msg)
        return v


@dataclass
class EnrichmentReport:
    """Outcome of enriching a batch of repositories."""

    enriched: list[EnrichedRepository] = field(default_factory=list)
    skipped: list[SkippedRepository] = field(default_factory=list)

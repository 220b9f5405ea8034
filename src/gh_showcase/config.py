"""Configuration loading and validation."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


class AuthConfig(BaseModel):
    """GitHub authentication configuration."""

    token_env: str = "GITHUB_TOKEN"


class GitHubConfig(BaseModel):
    """GitHub configuration section."""

    account: str = Field(min_length=1)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    api_url: str = "https://api.github.com"
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=2, ge=0, le=5, description="Retries for 5xx/network errors")


class FilterConfig(BaseModel):
    """Basic (pre-enrichment) filter configuration."""

    denylist: list[str] = Field(
        default_factory=list,
        description="Repository names that are never projects (profile repo, taps, forks)",
    )
    require_description: bool = True
    require_signal: bool = True

    @field_validator("denylist")
    @classmethod
    def normalize_denylist(cls, v: list[str]) -> list[str]:
        """Store denylist entries lowercased and stripped."""
        return [name.strip().lower() for name in v if name.strip()]


class EnrichmentConfig(BaseModel):
    """Per-repository metric enrichment configuration."""

    pacing_seconds: float = Field(default=3.0, ge=0, description="Delay between repositories")
    request_delay_seconds: float = Field(
        default=2.0, ge=0, description="Delay between the calls made for one repository"
    )
    cooldown_seconds: float = Field(default=60.0, ge=0, description="Wait after a rate limit")
    max_attempts: int = Field(default=2, ge=1, le=5)
    fallback_commit_count: int = Field(
        default=100, ge=0, description="Used when the owner is missing from contributors"
    )
    per_page: int = Field(default=100, ge=1, le=100)


class QualityConfig(BaseModel):
    """Catalog admission thresholds."""

    min_commits: int = Field(default=15, ge=0)
    min_releases: int = Field(default=1, ge=0, description="0 disables the release requirement")


class FeaturedConfig(BaseModel):
    """Featured selection configuration."""

    max_projects: int = Field(default=12, ge=1)
    min_commits: int = Field(default=25, ge=0)
    min_stars: int = Field(default=2, ge=0)
    star_weight: float = Field(default=10.0, ge=0)
    commit_weight: float = Field(default=1.0, ge=0)
    per_category: int = Field(default=2, ge=1)
    catch_all_category: str = "Other Projects"
    catch_all_per_category: int = Field(default=1, ge=0)
    backfill: bool = False

    @model_validator(mode="after")
    def validate_weights(self) -> "FeaturedConfig":
        """Stars must count for more than commits in the featured score."""
        if self.star_weight <= self.commit_weight:
            msg = "star_weight must be greater than commit_weight"
            raise ValueError(msg)
        return self


class OutputConfig(BaseModel):
    """Snapshot output configuration."""

    path: Path = Field(default=Path("src/data/opensource.json"))


class Config(BaseModel):
    """Root configuration model."""

    github: GitHubConfig
    filters: FilterConfig = Field(default_factory=FilterConfig)
    enrichment: EnrichmentConfig = Field(default_factory=EnrichmentConfig)
    quality: QualityConfig = Field(default_factory=QualityConfig)
    featured: FeaturedConfig = Field(default_factory=FeaturedConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def load_config(path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValidationError: If the config is invalid.
    """
    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        raw_config: dict[str, Any] = yaml.safe_load(f) or {}

    return Config.model_validate(raw_config)

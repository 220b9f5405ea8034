"""Snapshot serialization and persistence.

The JSON layout (camelCase keys, ``homepageUrl`` omitted when empty) is
what the static site reads from ``src/data/opensource.json``.
"""

import json
import logging
import os
import tempfile
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from gh_showcase.curate.models import PinnedResult, Snapshot

logger = logging.getLogger(__name__)


def dump_snapshot(snapshot: Snapshot) -> str:
    """Serialize a snapshot to indented JSON."""
    payload = snapshot.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def parse_snapshot(text: str) -> Snapshot:
    """Parse snapshot JSON.

    Raises:
        pydantic.ValidationError: If the document is not a valid snapshot.
    """
    return Snapshot.model_validate_json(text)


def read_snapshot(path: Path) -> Snapshot:
    """Read and parse a snapshot file.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the document is not a valid snapshot.
    """
    return parse_snapshot(path.read_text(encoding="utf-8"))


def write_snapshot(snapshot: Snapshot, path: Path) -> Path:
    """Write a snapshot atomically.

    Uses temp file + atomic rename so a failed run never leaves a partial
    file behind.

    Returns:
        The path written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=".snapshot_", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(dump_snapshot(snapshot))
        Path(temp_path).replace(path)
    except Exception:
        Path(temp_path).unlink(missing_ok=True)
        raise

    logger.info("Wrote %d projects to %s", len(snapshot.projects), path)
    return path


@dataclass
class SnapshotSummary:
    """Aggregate figures reported at the end of a run."""

    total_projects: int
    total_stars: int
    total_commits: int
    average_stars: float
    pinned_count: int
    categories: dict[str, int] = field(default_factory=dict)
    top_by_stars: list[tuple[str, int, int]] = field(default_factory=list)


def summarize_snapshot(
    snapshot: Snapshot,
    pinned: PinnedResult | None = None,
    top: int = 5,
) -> SnapshotSummary:
    """Compute summary statistics for a snapshot.

    Args:
        snapshot: Snapshot to summarize.
        pinned: Pinned set used to count pinned projects.
        top: Number of entries in ``top_by_stars``.

    Returns:
        SnapshotSummary; ``top_by_stars`` holds (name, stars, commits).
    """
    projects = snapshot.projects
    total_stars = sum(p.stars for p in projects)
    ranked = sorted(projects, key=lambda p: (-p.stars, -p.commit_count))

    return SnapshotSummary(
        total_projects=len(projects),
        total_stars=total_stars,
        total_commits=sum(p.commit_count for p in projects),
        average_stars=total_stars / len(projects) if projects else 0.0,
        pinned_count=sum(1 for p in projects if pinned is not None and p.id in pinned),
        categories=dict(Counter(p.category for p in projects)),
        top_by_stars=[(p.name, p.stars, p.commit_count) for p in ranked[:top]],
    )

"""Derive GitHub funding sources from package repository URLs."""

from __future__ import annotations

from typing import List, Optional

import httpx

from .errors import SourceError
from .logging import get_logger
from .metadata import Metadata
from .models import OwnerSource, RepoSource, SourceIdentifier, SourceMap

logger = get_logger("sources")

GITHUB_AUTHORITIES = frozenset({"github.com", "www.github.com"})


def try_get_sources(repository: Optional[str]) -> List[SourceIdentifier]:
    """Return the repository and owner sources for a GitHub repository URL.

    Packages without a repository, or hosted anywhere but GitHub, have no
    sources. A GitHub URL that does not name both an owner and a repository
    is an error.
    """
    if not repository:
        return []
    try:
        url = httpx.URL(repository)
    except httpx.InvalidURL as exc:
        raise SourceError(f"invalid repository URL {repository!r}: {exc}") from exc

    authority = url.netloc.decode("ascii", errors="replace").lower()
    if authority not in GITHUB_AUTHORITIES:
        return []

    segments = [segment for segment in url.path.split("/") if segment]
    if len(segments) < 2:
        raise SourceError(f"not a full Github URI: {repository}")
    owner, name = segments[0], segments[1]
    while name.endswith(".git"):
        name = name[: -len(".git")]
    return [RepoSource(owner=owner, name=name), OwnerSource(owner=owner)]


def collect_sources(metadata: Metadata) -> SourceMap:
    """Map every source to the non-workspace packages that point at it."""
    source_map: SourceMap = {}
    for package in metadata.dependencies():
        for source in try_get_sources(package.repository):
            source_map.setdefault(source, set()).add(package.ref())
    logger.debug(
        "Collected %d sources from %d dependencies",
        len(source_map),
        metadata.dependency_count,
    )
    return source_map


__all__ = ["GITHUB_AUTHORITIES", "collect_sources", "try_get_sources"]

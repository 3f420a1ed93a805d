"""Merge per-source links into per-package sets and group packages by link set."""

from __future__ import annotations

from typing import Dict, List, Tuple

from .models import GroupedMap, Link, PackageRef, ResolvedMap, SourceLinks, SourceMap


def merge_links(source_map: SourceMap, source_links: SourceLinks) -> ResolvedMap:
    """Union the links of every source into each package that shares the source."""
    resolved: ResolvedMap = {}
    for source, links in source_links.items():
        if not links:
            continue
        for package in source_map.get(source, ()):
            resolved.setdefault(package, set()).update(links)
    return resolved


def group_by_links(resolved: ResolvedMap) -> GroupedMap:
    """Invert ``resolved`` so that packages with identical link sets share one entry.

    Keys are sorted link tuples, so grouping depends on set content only, and
    both the groups and the packages within each group come out sorted.
    """
    buckets: Dict[Tuple[Link, ...], List[PackageRef]] = {}
    for package, links in resolved.items():
        key = tuple(sorted(links))
        buckets.setdefault(key, []).append(package)
    return {key: tuple(sorted(buckets[key])) for key in sorted(buckets)}


def ungroup(grouped: GroupedMap) -> ResolvedMap:
    """Expand a grouped mapping back into per-package link sets."""
    return {package: set(links) for links, packages in grouped.items() for package in packages}


__all__ = ["group_by_links", "merge_links", "ungroup"]

"""Pipeline orchestration for `cargo fund`."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from .aggregate import group_by_links, merge_links
from .config import ClientSettings
from .github import GithubResolver
from .logging import get_logger
from .metadata import Metadata, MetadataOptions, load_metadata
from .models import GroupedMap, ResolvedMap, SourceMap
from .render import render_tree
from .sources import collect_sources

MetadataLoader = Callable[[MetadataOptions], Metadata]


@dataclass
class FundReport:
    """Everything computed for one run, ready to render."""

    root: str
    source_map: SourceMap
    resolved: ResolvedMap
    grouped: GroupedMap
    total: int

    @property
    def matched(self) -> int:
        return len(self.resolved)

    def render(self) -> str:
        return render_tree(self.root, self.grouped, self.matched, self.total)


class Orchestrator:
    """Runs metadata collection, link resolution, aggregation and rendering."""

    def __init__(
        self,
        settings: ClientSettings,
        *,
        metadata_loader: MetadataLoader | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        resolver: GithubResolver | None = None,
    ) -> None:
        self.settings = settings
        self.metadata_loader = metadata_loader or load_metadata
        self.resolver = resolver or GithubResolver(settings, transport=transport)
        self.logger = get_logger("orchestrator")

    async def build_report(self, metadata: Metadata) -> FundReport:
        source_map = collect_sources(metadata)
        source_links = await self.resolver.resolve(source_map)
        resolved = merge_links(source_map, source_links)
        grouped = group_by_links(resolved)
        self.logger.info(
            "Found funding links for %d of %d dependencies in %d groups",
            len(resolved),
            metadata.dependency_count,
            len(grouped),
        )
        return FundReport(
            root=metadata.workspace_root,
            source_map=source_map,
            resolved=resolved,
            grouped=grouped,
            total=metadata.dependency_count,
        )

    def run(self, options: MetadataOptions | None = None) -> str:
        """Return the rendered funding tree for the workspace described by ``options``."""
        metadata = self.metadata_loader(options or MetadataOptions())
        report = asyncio.run(self.build_report(metadata))
        return report.render()


__all__ = ["FundReport", "Orchestrator"]

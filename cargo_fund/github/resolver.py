"""Resolve funding links for GitHub sources with one GraphQL round trip."""

from __future__ import annotations

from typing import Optional

import httpx

from ..config import ClientSettings
from ..logging import get_logger
from ..models import SourceLinks, SourceMap
from .client import GithubClient
from .links import extract_source_links
from .query import QueryBuilder
from .response import classify_response

logger = get_logger("github.resolver")


class GithubResolver:
    """Batches every source into a single query and reads back funding links."""

    def __init__(
        self,
        settings: ClientSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        query_builder: QueryBuilder | None = None,
    ) -> None:
        self.client = GithubClient(settings, transport=transport)
        self.query_builder = query_builder or QueryBuilder()

    async def resolve(self, source_map: SourceMap) -> SourceLinks:
        plan = self.query_builder.build(source_map)
        response = await self.client.post(plan.payload())
        classified = classify_response(response)
        source_links = extract_source_links(plan, classified)
        logger.debug(
            "Finished resolving Github links: %d of %d sources had links",
            len(source_links),
            len(plan.aliases),
        )
        return source_links


__all__ = ["GithubResolver"]

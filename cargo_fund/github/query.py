"""Batch every funding source into a single GraphQL query."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..logging import get_logger
from ..models import OwnerSource, PackageRef, RepoSource, SourceIdentifier, SourceMap, source_sort_key

logger = get_logger("github.query")

_TEMPLATE_NAME = "funding_links.graphql.j2"


@dataclass(frozen=True)
class AliasEntry:
    """The source queried under an alias and the packages that share it."""

    source: SourceIdentifier
    packages: FrozenSet[PackageRef]


@dataclass
class QueryPlan:
    """A rendered query plus the alias side table used to read its response."""

    query: str
    aliases: Dict[str, AliasEntry]

    def payload(self) -> Dict[str, str]:
        return {"query": self.query}


def _create_env(templates_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=False,
        undefined=StrictUndefined,
    )


class QueryBuilder:
    """Renders the batched `FundingLinks` query from a template."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = _create_env(self.templates_dir)

    def build(self, source_map: SourceMap) -> QueryPlan:
        # Sources are sorted so the same dependency graph yields the same request body.
        aliases: Dict[str, AliasEntry] = {}
        fragments: List[Dict[str, str]] = []
        for index, source in enumerate(sorted(source_map, key=source_sort_key)):
            alias = f"_{index}"
            aliases[alias] = AliasEntry(source=source, packages=frozenset(source_map[source]))
            fragments.append(_fragment(alias, source))

        template = self._env.get_template(_TEMPLATE_NAME)
        query = template.render(fragments=fragments) + "\n"
        logger.debug("Built query with %d aliases (%d bytes)", len(aliases), len(query))
        return QueryPlan(query=query, aliases=aliases)


def _fragment(alias: str, source: SourceIdentifier) -> Dict[str, str]:
    if isinstance(source, RepoSource):
        return {"kind": "repo", "alias": alias, "owner": source.owner, "name": source.name}
    if isinstance(source, OwnerSource):
        return {"kind": "owner", "alias": alias, "owner": source.owner}
    raise TypeError(f"Unsupported source type: {type(source).__name__}")


def build_query(source_map: SourceMap) -> QueryPlan:
    """Build the single batched query for every source in ``source_map``."""
    return QueryBuilder().build(source_map)


__all__ = ["AliasEntry", "QueryBuilder", "QueryPlan", "build_query"]

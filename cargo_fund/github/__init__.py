"""GitHub GraphQL funding-link resolution."""

from .client import GithubClient
from .links import extract_source_links, link_from_funding_entry, owner_sponsor_link
from .query import AliasEntry, QueryBuilder, QueryPlan, build_query
from .resolver import GithubResolver
from .response import ClassifiedResponse, classify_response

__all__ = [
    "AliasEntry",
    "ClassifiedResponse",
    "GithubClient",
    "GithubResolver",
    "QueryBuilder",
    "QueryPlan",
    "build_query",
    "classify_response",
    "extract_source_links",
    "link_from_funding_entry",
    "owner_sponsor_link",
]

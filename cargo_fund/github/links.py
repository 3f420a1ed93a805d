"""Turn GitHub response payloads into normalized funding links."""

from __future__ import annotations

from typing import Any, Set

import httpx
from pydantic import ValidationError

from ..errors import LinkParseError, ProtocolError, UriConstructionError
from ..logging import get_logger
from ..models import GITHUB_PLATFORM, Link, OwnerSource, Platform, PlatformKind, RepoSource, SourceLinks
from .query import QueryPlan
from .response import MALFORMED_RESPONSE, ClassifiedResponse
from .schema import OwnerPayload, RepositoryPayload

logger = get_logger("github.links")

GITHUB_DOMAIN = "github.com"
SPONSORS_PREFIX = "/sponsors"

# Characters RFC 3986 never allows unescaped in a URI.
_UNSAFE_CHARACTERS = frozenset(' "<>\\^`{|}')


def _needs_escaping(url: str) -> bool:
    return any(char in _UNSAFE_CHARACTERS or not char.isascii() or not char.isprintable() for char in url)


def _normalize(parsed: httpx.URL) -> httpx.URL:
    # httpx reports an empty path as "/" but keeps it empty when printing.
    if parsed.path == "/":
        return parsed.copy_with(path="/")
    return parsed


def link_from_funding_entry(platform: str, url: str) -> Link:
    """Build a link from a `fundingLinks` entry.

    GitHub reports its own sponsorship platform as a bare profile URL
    (``https://github.com/<login>``), so GITHUB links get ``/sponsors``
    inserted in front of the path. URLs are not escaped on the way in: one
    that needs escaping is rejected.
    """
    resolved = Platform.parse(platform)
    if _needs_escaping(url):
        raise LinkParseError(f"invalid URL {url!r}: contains characters that must be escaped")
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise LinkParseError(f"invalid URL {url!r}: {exc}") from exc
    if not parsed.scheme or not parsed.host:
        raise LinkParseError(f"not an absolute URL: {url!r}")

    try:
        if resolved.kind is PlatformKind.GITHUB:
            parsed = parsed.copy_with(path=SPONSORS_PREFIX + parsed.path)
        else:
            parsed = _normalize(parsed)
    except httpx.InvalidURL as exc:
        raise LinkParseError(f"cannot normalize URL {url!r}: {exc}") from exc
    return Link(platform=resolved, uri=str(parsed))


def owner_sponsor_link(owner: str) -> Link:
    """Build the GitHub Sponsors link for an owner with a sponsorship listing."""
    candidate = f"https://{GITHUB_DOMAIN}{SPONSORS_PREFIX}/{owner}"
    if _needs_escaping(candidate):
        raise UriConstructionError(f"invalid sponsors URL {candidate!r}: contains characters that must be escaped")
    try:
        parsed = httpx.URL(candidate)
    except httpx.InvalidURL as exc:
        raise UriConstructionError(f"invalid sponsors URL {candidate!r}: {exc}") from exc
    return Link(platform=GITHUB_PLATFORM, uri=str(parsed))


def _repository_links(alias: str, payload: Any) -> Set[Link]:
    try:
        repository = RepositoryPayload.model_validate(payload)
    except ValidationError as exc:
        raise ProtocolError(MALFORMED_RESPONSE) from exc

    links: Set[Link] = set()
    for entry in repository.funding_links or []:
        try:
            links.add(link_from_funding_entry(entry.platform, entry.url))
        except LinkParseError as exc:
            logger.warning(
                "could not parse Github funding link (platform=%s, uri=%s); skipping: %s",
                entry.platform,
                entry.url,
                exc,
            )
    logger.debug("%s: %d funding links", alias, len(links))
    return links


def _owner_links(alias: str, owner: str, payload: Any) -> Set[Link]:
    try:
        listing = OwnerPayload.model_validate(payload)
    except ValidationError as exc:
        raise ProtocolError(MALFORMED_RESPONSE) from exc
    if listing.sponsors_listing is None:
        return set()
    try:
        link = owner_sponsor_link(owner)
    except UriConstructionError as exc:
        logger.warning("could not create valid owner sponsor link for %s; skipping: %s", owner, exc)
        return set()
    logger.debug("%s: %s has a sponsorship listing", alias, owner)
    return {link}


def extract_source_links(plan: QueryPlan, classified: ClassifiedResponse) -> SourceLinks:
    """Collect the links each queried source produced, keyed by source."""
    source_links: SourceLinks = {}
    for alias, entry in plan.aliases.items():
        if alias in classified.skipped_aliases:
            logger.debug("Skipping %s (%s): not found", alias, entry.source)
            continue
        payload = classified.body.alias_payload(alias)
        if payload is None:
            # No result usually means a private or renamed repository.
            continue
        if isinstance(entry.source, RepoSource):
            links = _repository_links(alias, payload)
        elif isinstance(entry.source, OwnerSource):
            links = _owner_links(alias, entry.source.owner, payload)
        else:  # pragma: no cover - SourceIdentifier is closed
            raise TypeError(f"Unsupported source type: {type(entry.source).__name__}")
        if links:
            source_links[entry.source] = links
    return source_links


__all__ = [
    "GITHUB_DOMAIN",
    "SPONSORS_PREFIX",
    "extract_source_links",
    "link_from_funding_entry",
    "owner_sponsor_link",
]

"""Classify GitHub GraphQL responses into usable data or fatal errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

import httpx
from pydantic import ValidationError

from ..errors import AuthenticationError, ProtocolError
from ..logging import get_logger
from .schema import GraphQLResponse, RateLimit

logger = get_logger("github.response")

GITHUB_TOKEN_HELP = (
    "Invalid Github API token. Create a token with the `public_repo` and `user` scopes "
    "at https://github.com/settings/tokens."
)

GITHUB_TOKEN_SCOPES_HELP = (
    "Insufficient Github API token scopes. Modify your token to include the `public_repo` "
    "and `user` scopes at https://github.com/settings/tokens."
)

MALFORMED_RESPONSE = "Malformed Github API response"


@dataclass
class ClassifiedResponse:
    """A decoded response body together with aliases that must be ignored."""

    body: GraphQLResponse
    skipped_aliases: FrozenSet[str] = field(default_factory=frozenset)
    rate_limit: Optional[RateLimit] = None


def check_status(response: httpx.Response) -> None:
    """Raise unless the transport answered 200 OK."""
    if response.status_code == httpx.codes.OK:
        return
    if response.status_code == httpx.codes.UNAUTHORIZED:
        raise AuthenticationError(GITHUB_TOKEN_HELP)
    raise ProtocolError(
        f"Github API returned unexpected status: {response.status_code} {response.reason_phrase}".rstrip()
    )


def decode_body(content: bytes) -> GraphQLResponse:
    try:
        return GraphQLResponse.model_validate_json(content)
    except ValidationError as exc:
        raise ProtocolError(MALFORMED_RESPONSE) from exc


def classify_response(response: httpx.Response) -> ClassifiedResponse:
    """Validate status and body, then sort GraphQL errors into fatal and recoverable.

    ``INSUFFICIENT_SCOPES`` and unknown error types abort the run. ``NOT_FOUND``
    means the repository or owner no longer resolves; the alias named in the
    error path is skipped and every other alias is processed normally.
    """
    check_status(response)
    logger.debug("Decoding Github response (%d bytes)", len(response.content))
    body = decode_body(response.content)

    skipped = set()
    not_found = False
    for error in body.errors or []:
        if error.message is None or error.type is None:
            raise ProtocolError(MALFORMED_RESPONSE)
        if error.type == "INSUFFICIENT_SCOPES":
            raise AuthenticationError(GITHUB_TOKEN_SCOPES_HELP)
        if error.type == "NOT_FOUND":
            logger.info("%s", error.message)
            not_found = True
            if error.alias is not None:
                skipped.add(error.alias)
            continue
        logger.debug("Github API error entry: %s", error.model_dump())
        raise ProtocolError(f"Github API response contained error: {error.message}")

    # NOT_FOUND entries are recoverable even when GitHub returns no data at all.
    if body.data is None and not not_found:
        raise ProtocolError(MALFORMED_RESPONSE)

    try:
        rate_limit = body.rate_limit
    except ValidationError:
        logger.debug("Ignoring unreadable rateLimit payload")
        rate_limit = None
    if rate_limit is not None:
        logger.debug(
            "Github rate limit: query cost %s, %s points remaining",
            rate_limit.cost,
            rate_limit.remaining,
        )

    return ClassifiedResponse(body=body, skipped_aliases=frozenset(skipped), rate_limit=rate_limit)


__all__ = [
    "ClassifiedResponse",
    "GITHUB_TOKEN_HELP",
    "GITHUB_TOKEN_SCOPES_HELP",
    "MALFORMED_RESPONSE",
    "check_status",
    "classify_response",
    "decode_body",
]

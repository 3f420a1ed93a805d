"""Typed view of GitHub GraphQL responses."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class GraphQLError(BaseModel):
    """One entry of the top-level `errors` list."""

    model_config = ConfigDict(extra="allow")

    message: Optional[str] = None
    type: Optional[str] = None
    path: Optional[List[Union[str, int]]] = None

    @property
    def alias(self) -> Optional[str]:
        if self.path and isinstance(self.path[0], str):
            return self.path[0]
        return None


class FundingLink(BaseModel):
    platform: str
    url: str


class RepositoryPayload(BaseModel):
    funding_links: Optional[List[FundingLink]] = Field(default=None, alias="fundingLinks")


class SponsorsListing(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None


class OwnerPayload(BaseModel):
    # `... on Organization` and `... on User` both select into this field.
    sponsors_listing: Optional[SponsorsListing] = Field(default=None, alias="sponsorsListing")


class RateLimit(BaseModel):
    cost: Optional[int] = None
    remaining: Optional[int] = None


class GraphQLResponse(BaseModel):
    """Success and partial-failure bodies share this shape."""

    data: Optional[Dict[str, Any]] = None
    errors: Optional[List[GraphQLError]] = None

    def alias_payload(self, alias: str) -> Any:
        if not self.data:
            return None
        return self.data.get(alias)

    @property
    def rate_limit(self) -> Optional[RateLimit]:
        payload = self.alias_payload("rateLimit")
        if not isinstance(payload, dict):
            return None
        return RateLimit.model_validate(payload)


__all__ = [
    "FundingLink",
    "GraphQLError",
    "GraphQLResponse",
    "OwnerPayload",
    "RateLimit",
    "RepositoryPayload",
    "SponsorsListing",
]

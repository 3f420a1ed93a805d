"""Async transport for the GitHub GraphQL endpoint."""

from __future__ import annotations

from typing import Mapping, Optional

import httpx

from ..config import ClientSettings
from ..errors import ProtocolError
from ..logging import get_logger

logger = get_logger("github.client")


class GithubClient:
    """Sends GraphQL queries to GitHub with bearer authentication."""

    def __init__(
        self,
        settings: ClientSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.timeout,
            headers={"User-Agent": self.settings.user_agent},
            transport=self._transport,
        )

    async def post(self, payload: Mapping[str, object]) -> httpx.Response:
        """POST ``payload`` as JSON to the configured endpoint and return the raw response."""
        headers = {"Authorization": f"Bearer {self.settings.api_token}"}
        logger.debug("Sending Github GraphQL query to %s", self.settings.endpoint)
        try:
            async with self._create_client() as client:
                response = await client.post(self.settings.endpoint, json=dict(payload), headers=headers)
        except httpx.HTTPError as exc:
            raise ProtocolError(f"Github API request failed: {exc}") from exc
        logger.debug("Received Github GraphQL response with status %d", response.status_code)
        return response


__all__ = ["GithubClient"]

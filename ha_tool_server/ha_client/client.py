"""Home Assistant REST API client for tool execution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

import aiohttp

if TYPE_CHECKING:
    from ..config import HubConfig

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class HubRequest:
    """A single call against the Home Assistant REST API."""

    method: Literal["GET", "POST"]
    path: str
    body: dict[str, Any] | None = None


class HomeAssistantAPIError(Exception):
    """Raised when Home Assistant answers with a non-success status."""

    def __init__(self, status: int, reason: str | None, body: str) -> None:
        """Initialize the error from the failed response."""
        super().__init__(f"Home Assistant API error: {status} {reason or ''}\n{body}")
        self.status = status
        self.reason = reason
        self.body = body


class HomeAssistantClient:
    """Client for the Home Assistant REST API."""

    def __init__(
        self,
        config: HubConfig,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Base URL and token of the Home Assistant instance.
            session: Optional session to reuse. When omitted, one is created
                on first use and closed by async_close().
        """
        self.config = config
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    def _headers(self, with_body: bool) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self.config.token}"}
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def async_request(self, request: HubRequest) -> Any:
        """Send a request and return the decoded JSON response.

        Args:
            request: The request to send.

        Returns:
            The JSON body of the response.

        Raises:
            HomeAssistantAPIError: If the response status is not a success.
            aiohttp.ClientError: If the request could not be sent.
            ValueError: If the response body is not valid JSON.
        """
        url = f"{self.config.base_url}{request.path}"
        kwargs: dict[str, Any] = {"headers": self._headers(request.body is not None)}
        if request.body is not None:
            kwargs["json"] = request.body

        _LOGGER.debug("%s %s body=%s", request.method, url, request.body)

        async with self.session.request(request.method, url, **kwargs) as resp:
            if not resp.ok:
                text = await resp.text(errors="replace")
                _LOGGER.debug("%s %s failed with status %s", request.method, url, resp.status)
                raise HomeAssistantAPIError(resp.status, resp.reason, text)

            # Parsed regardless of Content-Type
            result = await resp.json(content_type=None)

        _LOGGER.debug("%s %s returned %s", request.method, url, result)
        return result

    async def async_close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            try:
                await self._session.close()
            except Exception as err:
                _LOGGER.warning("Error closing Home Assistant session: %s", err)
            finally:
                self._session = None

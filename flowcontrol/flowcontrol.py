"""HTTP client for flowcontrol valve controllers."""

from __future__ import annotations

import asyncio
import json
import logging

import aiohttp

from .const import (
    DEFAULT_REQUEST_TIMEOUT,
    ENDPOINT_ALIVE,
    ENDPOINT_FLOW_OFF,
    ENDPOINT_FLOW_ON,
)
from .exceptions import FlowControlConnectionError, FlowControlDataError
from .models import StatusSnapshot

_LOGGER = logging.getLogger(__name__)


class FlowControl:
    """Client for a flowcontrol device."""

    def __init__(
        self,
        host: str,
        websession: aiohttp.ClientSession | None = None,
        request_timeout: float | None = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the flowcontrol connection.

        Args:
            host: host or host:port of the device
            websession: Optional aiohttp ClientSession. If not provided, one will be created.
            request_timeout: Total seconds allowed per request, None for no limit
        """
        if not host.startswith("http"):
            host = f"http://{host}"
        self.base_url = host.rstrip("/")
        self._websession = websession
        self._own_session = websession is None
        self._timeout = aiohttp.ClientTimeout(total=request_timeout)

    async def close_connection(self) -> None:
        """Close the connection and clean up resources."""
        if self._own_session and self._websession:
            await self._websession.close()
            self._websession = None

    async def _ensure_session(self) -> None:
        """Ensure a websession exists."""
        if self._websession is None:
            self._websession = aiohttp.ClientSession()
            self._own_session = True

    async def __aenter__(self) -> FlowControl:
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close_connection()

    async def _request(self, path: str) -> bytes:
        """GET a path and return the whole body, whatever the status."""
        await self._ensure_session()
        assert self._websession is not None
        url = f"{self.base_url}{path}"
        try:
            async with self._websession.get(url, timeout=self._timeout) as response:
                body = await response.read()
                _LOGGER.debug("GET %s -> %s (%d bytes)", url, response.status, len(body))
                return body
        except aiohttp.ClientError as err:
            raise FlowControlConnectionError(f"Failed to connect to device: {err}") from err
        except asyncio.TimeoutError as err:
            raise FlowControlConnectionError(f"Timeout talking to device at {url}") from err

    async def get(self, path: str) -> tuple[bytes, bool]:
        """GET a path, returning (body, ok) instead of raising on network failure."""
        try:
            return await self._request(path), True
        except FlowControlConnectionError as err:
            _LOGGER.warning("Error: %s", err)
            return b"", False

    async def fetch_status(self) -> StatusSnapshot:
        """Fetch and decode the /alive status."""
        body = await self._request(ENDPOINT_ALIVE)
        try:
            data = json.loads(body)
        except ValueError as err:
            raise FlowControlDataError(f"Failed to parse status data: {err}") from err
        _LOGGER.debug("Status Data: %s", data)
        return StatusSnapshot.from_dict(data)

    async def valve_on(self) -> bool:
        """Ask the device to open the valve."""
        _, ok = await self.get(ENDPOINT_FLOW_ON)
        return ok

    async def valve_off(self) -> bool:
        """Ask the device to close the valve."""
        _, ok = await self.get(ENDPOINT_FLOW_OFF)
        return ok

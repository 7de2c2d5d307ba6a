from __future__ import annotations

import json
import logging
from typing import Callable, Optional, TypeVar
from urllib.parse import quote

import httpx

from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, ClientSettings, load_settings
from .decoding import (
    BARE,
    ResponseShape,
    decode_stations,
    decode_stations_with_debugging,
    decode_trains,
    decode_trains_with_debugging,
    extract_error_message,
)
from .errors import AmtrakApiError, AmtrakRequestError
from .responses import StationsByCode, TrainsByNumber


LOGGER = logging.getLogger("amtrak-client")

T = TypeVar("T")


class AmtrakClient:
    """Client wrapper around the Amtraker v3 API.

    The client does not hold a connection. Every call opens its own HTTP
    client, performs a single GET and closes it again, so one instance can be
    shared freely between concurrent tasks.

    Failures raise :class:`AmtrakError` subclasses, except caller-applied
    cancellation, which propagates unchanged (see :meth:`fetch`).
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
        response_shape: ResponseShape = BARE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._response_shape = response_shape
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: ClientSettings, **kwargs) -> "AmtrakClient":
        return cls(base_url=settings.base_url, timeout_seconds=settings.timeout_seconds, **kwargs)

    @classmethod
    def from_env(cls, **kwargs) -> "AmtrakClient":
        """Build a client from the ``AMTRAKER_*`` environment variables."""
        return cls.from_settings(load_settings(), **kwargs)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout_seconds(self) -> Optional[float]:
        return self._timeout_seconds

    @property
    def response_shape(self) -> ResponseShape:
        return self._response_shape

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._base_url!r})"

    async def trains(self) -> TrainsByNumber:
        """Return every train currently tracked, grouped by train number."""
        return await self._request("/trains", decode_trains)

    async def trains_with_debugging(self) -> TrainsByNumber:
        """Same as :meth:`trains`, but decode failures carry the field path and raw body."""
        return await self._request("/trains", decode_trains_with_debugging)

    async def train(self, train_identifier: str) -> TrainsByNumber:
        """Return the train(s) matching a train id (``"612-5"``) or a train number (``"612"``).

        The mapping may hold zero, one or several trains for the requested key.
        """
        return await self._request(_resource_path("trains", train_identifier), decode_trains)

    async def train_with_debugging(self, train_identifier: str) -> TrainsByNumber:
        return await self._request(_resource_path("trains", train_identifier), decode_trains_with_debugging)

    async def stations(self) -> StationsByCode:
        """Return all stations in the network keyed by station code."""
        return await self._request("/stations", decode_stations)

    async def stations_with_debugging(self) -> StationsByCode:
        return await self._request("/stations", decode_stations_with_debugging)

    async def station(self, station_code: str) -> StationsByCode:
        """Return the station with ``station_code``; the mapping is empty when it does not exist."""
        return await self._request(_resource_path("stations", station_code), decode_stations)

    async def station_with_debugging(self, station_code: str) -> StationsByCode:
        return await self._request(_resource_path("stations", station_code), decode_stations_with_debugging)

    async def fetch(self, path: str) -> bytes:
        """Perform one GET against ``{base_url}{path}`` and return the buffered body.

        Connection errors and httpx timeouts raise :class:`AmtrakRequestError`.
        Cancellation applied by the caller (``task.cancel()``,
        ``asyncio.wait_for``, ``asyncio.timeout``) is not wrapped: it propagates
        as ``asyncio.CancelledError`` or ``TimeoutError``, which
        ``except AmtrakError`` does not catch. The in-flight request is closed
        either way and nothing is decoded.
        """
        url = f"{self._base_url}{path}"
        LOGGER.debug("GET %s", url)

        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds, transport=self._transport) as client:
                response = await client.get(url)
                body = await response.aread()
        except httpx.HTTPError as exc:
            LOGGER.error("Unable to reach Amtraker at %s: %s", url, exc)
            raise AmtrakRequestError(f"Unable to send the request to {url}: {exc}") from exc

        if not response.is_success:
            message = _error_message(response, body)
            LOGGER.warning("Amtraker returned HTTP %s for %s: %s", response.status_code, url, message)
            raise AmtrakApiError(message, status_code=response.status_code)

        return body

    async def _request(self, path: str, decoder: Callable[..., T]) -> T:
        body = await self.fetch(path)
        return decoder(body, shape=self._response_shape)


def _resource_path(collection: str, identifier: str) -> str:
    if not identifier:
        raise ValueError(f"An identifier must be provided for /{collection}.")
    return f"/{collection}/{quote(str(identifier), safe='')}"


def _error_message(response: httpx.Response, body: bytes) -> str:
    try:
        message = extract_error_message(json.loads(body))
    except (ValueError, RecursionError):
        message = None

    if message is None:
        message = body.decode("utf-8", errors="replace").strip()
    return message or response.reason_phrase or f"HTTP {response.status_code}"

"""Decoders turning Amtraker response bodies into the response model.

The service has returned its collections in two layouts over time: the bare
keyed mapping (``{"612": [...]}``) and the same mapping wrapped in a
single-field envelope object. Each layout is a small shape strategy with an
``unwrap`` method; the entity decoding underneath is shared.

Two entry points exist per collection. The plain ones raise
:class:`AmtrakResponseError` with a generic message. The ``_with_debugging``
ones raise :class:`AmtrakDebuggingResponseError` carrying the path of the
offending field and the raw response text.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple, Union

from pydantic import TypeAdapter, ValidationError

from .errors import AmtrakApiError, AmtrakDebuggingResponseError, AmtrakResponseError
from .responses import StationsByCode, TrainsByNumber


LOGGER = logging.getLogger("amtrak-decoding")

_TRAINS_ADAPTER: TypeAdapter[TrainsByNumber] = TypeAdapter(TrainsByNumber)
_STATIONS_ADAPTER: TypeAdapter[StationsByCode] = TypeAdapter(StationsByCode)

Location = Tuple[Union[str, int], ...]


class PayloadShapeError(ValueError):
    """Raised by a shape strategy when the payload does not have its layout."""

    def __init__(self, message: str, location: Location = ()) -> None:
        super().__init__(message)
        self.location = location


@dataclass(frozen=True, slots=True)
class BareShape:
    """The payload is the keyed mapping itself."""

    def unwrap(self, payload: Any) -> Tuple[Location, Any]:
        return (), payload


@dataclass(frozen=True, slots=True)
class EnvelopedShape:
    """The keyed mapping sits under the only field of an envelope object.

    ``field`` pins the envelope key; when ``None`` any single key is accepted.
    """

    field: Optional[str] = None

    def unwrap(self, payload: Any) -> Tuple[Location, Any]:
        if not isinstance(payload, dict) or len(payload) != 1:
            raise PayloadShapeError("expected a single-field envelope object")

        ((key, value),) = payload.items()
        if self.field is not None and key != self.field:
            raise PayloadShapeError(f"expected envelope field '{self.field}', found '{key}'")
        return (key,), value


ResponseShape = Union[BareShape, EnvelopedShape]

BARE = BareShape()
ENVELOPED = EnvelopedShape()


def format_path(location: Iterable[Union[str, int]]) -> str:
    """Render a location as ``612[0].stations[1].code``; the root is ``.``."""
    text = ""
    for part in location:
        if isinstance(part, int):
            text += f"[{part}]"
        elif text:
            text += f".{part}"
        else:
            text = str(part)
    return text or "."


def decode_trains(body: bytes, *, shape: ResponseShape = BARE) -> TrainsByNumber:
    """Decode a ``/trains`` or ``/trains/{id}`` response body."""
    return _decode(body, _TRAINS_ADAPTER, shape, debugging=False)


def decode_trains_with_debugging(body: bytes, *, shape: ResponseShape = BARE) -> TrainsByNumber:
    """Same as :func:`decode_trains`, reporting the failing field path."""
    return _decode(body, _TRAINS_ADAPTER, shape, debugging=True)


def decode_stations(body: bytes, *, shape: ResponseShape = BARE) -> StationsByCode:
    """Decode a ``/stations`` or ``/stations/{code}`` response body."""
    return _decode(body, _STATIONS_ADAPTER, shape, debugging=False)


def decode_stations_with_debugging(body: bytes, *, shape: ResponseShape = BARE) -> StationsByCode:
    """Same as :func:`decode_stations`, reporting the failing field path."""
    return _decode(body, _STATIONS_ADAPTER, shape, debugging=True)


def encode_trains(trains: TrainsByNumber) -> bytes:
    return _TRAINS_ADAPTER.dump_json(trains, by_alias=True)


def encode_stations(stations: StationsByCode) -> bytes:
    return _STATIONS_ADAPTER.dump_json(stations, by_alias=True)


def extract_error_message(payload: Any) -> Optional[str]:
    """Return the message of an ``{"error": "..."}`` envelope, if that is what ``payload`` is."""
    if isinstance(payload, dict):
        message = payload.get("error")
        if isinstance(message, str):
            return message
    return None


def _decode(body: bytes, adapter: TypeAdapter[Any], shape: ResponseShape, *, debugging: bool) -> Any:
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError) as exc:
        raise _failure(body, (), f"response was not valid JSON ({exc})", debugging) from exc

    _check_service_error(payload)
    if _is_empty_collection(payload):
        return {}

    try:
        location, inner = shape.unwrap(payload)
    except PayloadShapeError as exc:
        raise _failure(body, exc.location, str(exc), debugging) from exc

    _check_service_error(inner)
    if _is_empty_collection(inner):
        return {}

    try:
        return adapter.validate_python(inner)
    except ValidationError as exc:
        first = exc.errors(include_url=False)[0]
        raise _failure(body, location + tuple(first["loc"]), first["msg"], debugging) from exc


def _check_service_error(value: Any) -> None:
    message = extract_error_message(value)
    if message is not None:
        LOGGER.warning("Amtraker API reported an error: %s", message)
        raise AmtrakApiError(message)


def _is_empty_collection(value: Any) -> bool:
    # The service answers with [] when a single-item lookup matches nothing.
    return isinstance(value, list) and not value


def _failure(body: bytes, location: Sequence[Union[str, int]], reason: str, debugging: bool) -> AmtrakResponseError:
    path = format_path(location)
    LOGGER.debug("Unable to deserialize Amtraker response at %s: %s", path, reason)

    if not debugging:
        return AmtrakResponseError(f"Unable to deserialize the received value: {reason}")

    return AmtrakDebuggingResponseError(
        f"Unable to deserialize the received value: {reason}",
        path=path,
        response=body.decode("utf-8", errors="replace"),
    )

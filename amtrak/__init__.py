"""Async client for the Amtraker v3 train tracking API."""

from .client import AmtrakClient  # noqa: F401
from .config import DEFAULT_BASE_URL, ClientSettings, load_settings  # noqa: F401
from .decoding import (  # noqa: F401
    BARE,
    ENVELOPED,
    BareShape,
    EnvelopedShape,
    decode_stations,
    decode_stations_with_debugging,
    decode_trains,
    decode_trains_with_debugging,
    encode_stations,
    encode_trains,
)
from .errors import (  # noqa: F401
    AmtrakApiError,
    AmtrakDebuggingResponseError,
    AmtrakError,
    AmtrakRequestError,
    AmtrakResponseError,
)
from .responses import Station, StationsByCode, StationStop, Train, TrainsByNumber, TrainStatus  # noqa: F401

__version__ = "0.2.0"

"""Response model for the Amtraker v3 API.

Entities are immutable once decoded. Attribute names are snake_case; the
wire names are kept as field aliases so the same models serialize back to
the service's JSON layout.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator


class TrainStatus(str, Enum):
    """Status of a train relative to one stop on its itinerary."""

    ENROUTE = "Enroute"
    STATION = "Station"
    DEPARTED = "Departed"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value: object) -> "TrainStatus":
        return cls.UNKNOWN


class _WireModel(BaseModel):
    # JSON types must match exactly: no "39.5" for a float, no 0/1 for a bool.
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore", strict=True)


def _parse_timestamp(value: Any) -> Any:
    """Parse an ISO-8601 timestamp; blank strings and null mean absent.

    Epoch numbers and numeric strings are rejected. A missing UTC offset is
    rejected by the ``AwareDatetime`` field type.
    """
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError("timestamp must be an ISO-8601 string")

    text = value.strip()
    if not text:
        return None

    text = text.replace("Z", "+00:00") if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"invalid ISO-8601 timestamp {value!r}") from None


class StationStop(_WireModel):
    """One stop on a train's itinerary."""

    name: str
    code: str
    tz: Optional[str] = None
    bus: Optional[bool] = None
    scheduled_arrival: Optional[AwareDatetime] = Field(default=None, alias="schArr")
    scheduled_departure: Optional[AwareDatetime] = Field(default=None, alias="schDep")
    arrival: Optional[AwareDatetime] = Field(default=None, alias="arr")
    departure: Optional[AwareDatetime] = Field(default=None, alias="dep")
    arrival_comment: Optional[str] = Field(default=None, alias="arrCmnt")
    departure_comment: Optional[str] = Field(default=None, alias="depCmnt")
    platform: Optional[str] = None
    status: TrainStatus = TrainStatus.UNKNOWN

    @field_validator("scheduled_arrival", "scheduled_departure", "arrival", "departure", mode="before")
    @classmethod
    def parse_timestamp(cls, value: Any) -> Any:
        return _parse_timestamp(value)

    @field_validator("status", mode="before")
    @classmethod
    def unrecognized_status_to_unknown(cls, value: Any) -> TrainStatus:
        # Any token the service invents later lands on UNKNOWN.
        if isinstance(value, TrainStatus):
            return value
        if isinstance(value, str):
            return TrainStatus(value)
        return TrainStatus.UNKNOWN


class Train(_WireModel):
    """A single active service run, keyed by ``train_id``."""

    route_name: str = Field(alias="routeName")
    train_num: str = Field(alias="trainNum")
    train_id: str = Field(alias="trainID")
    origin_code: str = Field(alias="origCode")
    origin_name: str = Field(alias="origName")
    destination_code: str = Field(alias="destCode")
    destination_name: str = Field(alias="destName")
    stations: Tuple[StationStop, ...] = Field(strict=False)

    lat: Optional[float] = None
    lon: Optional[float] = None
    train_timely: Optional[str] = Field(default=None, alias="trainTimely")
    heading: Optional[str] = None
    event_code: Optional[str] = Field(default=None, alias="eventCode")
    event_name: Optional[str] = Field(default=None, alias="eventName")
    event_tz: Optional[str] = Field(default=None, alias="eventTZ")
    origin_tz: Optional[str] = Field(default=None, alias="originTZ")
    destination_tz: Optional[str] = Field(default=None, alias="destTZ")
    train_state: Optional[str] = Field(default=None, alias="trainState")
    velocity: Optional[float] = None
    status_message: Optional[str] = Field(default=None, alias="statusMsg")
    created_at: Optional[AwareDatetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[AwareDatetime] = Field(default=None, alias="updatedAt")
    last_value: Optional[AwareDatetime] = Field(default=None, alias="lastValTS")
    object_id: Optional[int] = Field(default=None, alias="objectID")
    provider: Optional[str] = None
    provider_short: Optional[str] = Field(default=None, alias="providerShort")
    only_of_train_num: Optional[bool] = Field(default=None, alias="onlyOfTrainNum")

    @field_validator("created_at", "updated_at", "last_value", mode="before")
    @classmethod
    def parse_timestamp(cls, value: Any) -> Any:
        return _parse_timestamp(value)

    def current_stop(self) -> Optional[StationStop]:
        """Return the stop the train is currently heading to, if any."""
        for stop in self.stations:
            if stop.status is TrainStatus.ENROUTE:
                return stop
        return None


class Station(_WireModel):
    """A fixed-location stop in the network, keyed by ``code``."""

    name: str
    code: str
    tz: str
    lat: float
    lon: float
    address1: str
    address2: str
    city: str
    state: str
    zip: str
    trains: Tuple[str, ...] = Field(strict=False)


TrainsByNumber = Dict[str, List[Train]]
StationsByCode = Dict[str, Station]

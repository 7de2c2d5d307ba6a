"""Shared fixtures for the Amtraker client tests."""

import json
from typing import Callable, Dict, List, Tuple

import httpx
import pytest

from amtrak import AmtrakClient


BASE_URL = "http://amtraker.test/v3"

ABERDEEN = {
    "name": "Aberdeen",
    "code": "ABE",
    "tz": "America/New_York",
    "lat": 39.508447,
    "lon": -76.16326,
    "address1": "18 East Bel Air Avenue",
    "address2": " ",
    "city": "Aberdeen",
    "state": "MD",
    "zip": "21001",
    "trains": [],
}

ALDERSHOT = {
    "name": "Aldershot",
    "code": "AST",
    "tz": "America/Toronto",
    "lat": 43.313413,
    "lon": -79.855712,
    "address1": "1199 Waterdown Road",
    "address2": " ",
    "city": "Aldershot",
    "state": "ON",
    "zip": "L7T 4A8",
    "trains": ["69-17"],
}


def make_stop(code: str, name: str, status: str = "Departed", **extra) -> Dict:
    stop = {
        "name": name,
        "code": code,
        "tz": "America/New_York",
        "bus": False,
        "schArr": "2024-01-05T10:15:00-05:00",
        "schDep": "2024-01-05T10:17:00-05:00",
        "arr": "2024-01-05T10:16:00-05:00",
        "dep": "2024-01-05T10:18:00-05:00",
        "arrCmnt": "1 Minute Late",
        "depCmnt": "1 Minute Late",
        "status": status,
        "platform": "",
    }
    stop.update(extra)
    return stop


def make_train(train_id: str, train_num: str, stations: List[Dict], **extra) -> Dict:
    train = {
        "routeName": "Keystone",
        "trainNum": train_num,
        "trainID": train_id,
        "lat": 40.0,
        "lon": -75.5,
        "trainTimely": "On Time",
        "stations": stations,
        "heading": "W",
        "eventCode": "PHL",
        "eventTZ": "America/New_York",
        "eventName": "Philadelphia",
        "origCode": "NYP",
        "originTZ": "America/New_York",
        "origName": "New York Penn",
        "destCode": "HAR",
        "destTZ": "America/New_York",
        "destName": "Harrisburg",
        "trainState": "Active",
        "velocity": 62.5,
        "statusMsg": " ",
        "createdAt": "2024-01-05T09:00:00-05:00",
        "updatedAt": "2024-01-05T10:20:00-05:00",
        "lastValTS": "2024-01-05T10:19:00-05:00",
        "objectID": 1234,
        "provider": "Amtrak",
        "providerShort": "AMTK",
        "onlyOfTrainNum": True,
    }
    train.update(extra)
    return train


def keystone_612(train_id: str = "612-5") -> Dict:
    return make_train(
        train_id,
        "612",
        [
            make_stop("NYP", "New York Penn"),
            make_stop("PHL", "Philadelphia", status="Enroute", arr=None, dep=None),
            make_stop("HAR", "Harrisburg", status="", arr=None, dep=None),
        ],
    )


def dumps(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


@pytest.fixture
def make_client() -> Callable[..., AmtrakClient]:
    """Build a client whose requests are answered by ``handler``."""

    def factory(handler, **kwargs) -> AmtrakClient:
        return AmtrakClient(base_url=BASE_URL, transport=httpx.MockTransport(handler), **kwargs)

    return factory


@pytest.fixture
def routes():
    """Serve canned bodies by request path and record every request seen."""

    class Routes:
        def __init__(self) -> None:
            self.bodies: Dict[str, Tuple[int, bytes]] = {}
            self.requests: List[httpx.Request] = []

        def add(self, path: str, payload, status_code: int = 200) -> None:
            body = payload if isinstance(payload, bytes) else dumps(payload)
            self.bodies[path] = (status_code, body)

        def __call__(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            status_code, body = self.bodies.get(request.url.path, (404, b"Not Found"))
            return httpx.Response(status_code, content=body)

    return Routes()

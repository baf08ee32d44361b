"""Shared test fixtures for the AirAlert test suite."""

import json

import httpx
import pytest

from airalert.config import Settings


@pytest.fixture()
def settings():
    """Settings with fake secrets and a short interval."""
    return Settings(air_key="test_token", bark_key="test_bark", poll_interval=1)


@pytest.fixture()
def recorded():
    """List that the mock transport appends every outgoing request to."""
    return []


def make_http(recorded, handler):
    """httpx.Client whose requests are recorded and answered by handler."""
    def _transport(request: httpx.Request) -> httpx.Response:
        recorded.append(request)
        return handler(request)
    return httpx.Client(transport=httpx.MockTransport(_transport))


def feed_payload(aqi=42, status="ok", **data):
    """A WAQI feed envelope in the shape the live API returns."""
    body = {
        "aqi": aqi,
        "idx": 1451,
        "attributions": [{"url": "http://www.bjmemc.com.cn/", "name": "Beijing Environmental Protection Monitoring Center"}],
        "city": {"geo": [39.954592, 116.468117], "name": "Beijing (北京)", "url": "https://aqicn.org/city/beijing", "location": ""},
        "dominentpol": "pm25",
        "iaqi": {
            "co": {"v": 4.6},
            "h": {"v": 37},
            "no2": {"v": 9.2},
            "o3": {"v": 31.5},
            "p": {"v": 1016},
            "pm10": {"v": 27},
            "pm25": {"v": aqi},
            "so2": {"v": 1.6},
            "t": {"v": 21},
            "w": {"v": 1.5},
        },
        "time": {"s": "2024-10-19 14:00:00", "tz": "+08:00", "v": 1729346400, "iso": "2024-10-19T14:00:00+08:00"},
        "forecast": {"daily": {"pm25": [{"avg": 60, "day": "2024-10-19", "max": 89, "min": 31}]}},
        "debug": {"sync": "2024-10-19T15:26:32+09:00"},
    }
    body.update(data)
    return {"status": status, "data": body}


def json_response(payload, status_code=200):
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"),
                          headers={"Content-Type": "application/json"})

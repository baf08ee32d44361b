"""
WAQI (World Air Quality Index) API Connector.

Fetches the live feed for one station and decodes it into an
AirQualitySnapshot. Handles timeouts, HTTP errors, malformed responses and
missing fields by logging and returning None, which callers treat as
"AQI unknown this cycle".
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

import httpx

from airalert.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class AirQualitySnapshot:
    """One decoded station feed. Only aqi drives alerting."""
    aqi: int
    # Pollutant / weather sub-indices keyed by WAQI code (pm25, no2, t, h, ...)
    iaqi: Dict[str, float] = field(default_factory=dict)
    # Ancillary metadata, never consulted by the alert logic
    station_name: str = ""
    geo: Optional[Tuple[float, float]] = None
    dominant_pollutant: Optional[str] = None
    observed_at: Optional[datetime] = None
    source_url: str = ""


def _safe_float(val) -> Optional[float]:
    """Safely convert a value to float, returning None on failure."""
    if val is None or val == "-" or val == "" or isinstance(val, bool):
        return None
    try:
        value = float(val)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _parse_aqi(val) -> Optional[int]:
    """WAQI reports '-' for stations without a current reading."""
    if val is None or val == "-" or isinstance(val, bool):
        return None
    try:
        return int(val)
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_iaqi(data: dict) -> Dict[str, float]:
    """Extract every numeric sub-index from the WAQI iaqi block."""
    iaqi = data.get("iaqi")
    if not isinstance(iaqi, dict):
        return {}
    result = {}
    for key, block in iaqi.items():
        if not isinstance(block, dict):
            continue
        value = _safe_float(block.get("v"))
        if value is not None:
            result[key] = value
    return result


def _parse_geo(city_block: dict) -> Optional[Tuple[float, float]]:
    geo = city_block.get("geo")
    if not isinstance(geo, list) or len(geo) != 2:
        return None
    lat, lon = _safe_float(geo[0]), _safe_float(geo[1])
    if lat is None or lon is None:
        return None
    return lat, lon


def _parse_timestamp(time_block) -> Optional[datetime]:
    """Parse the 'time' block from WAQI response into a UTC datetime."""
    if not isinstance(time_block, dict):
        return None
    iso_str = time_block.get("iso", "")
    if not iso_str:
        return None
    try:
        dt = datetime.fromisoformat(iso_str.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_feed(payload, source_url: str = "") -> Optional[AirQualitySnapshot]:
    """
    Decode a WAQI feed envelope.

    Args:
        payload: The decoded JSON body.
        source_url: Redacted request URL recorded on the snapshot.

    Returns:
        AirQualitySnapshot, or None when the envelope is unusable.
    """
    if not isinstance(payload, dict):
        logger.error("WAQI response is not a JSON object")
        return None

    if payload.get("status") != "ok":
        logger.error("WAQI status not ok: %s (%s)", payload.get("status"), payload.get("data"))
        return None

    data = payload.get("data")
    if not isinstance(data, dict):
        logger.error("WAQI response missing 'data' object")
        return None

    aqi = _parse_aqi(data.get("aqi"))
    if aqi is None:
        logger.error("WAQI response has no usable AQI: %r", data.get("aqi"))
        return None

    city_block = data.get("city")
    if not isinstance(city_block, dict):
        city_block = {}

    return AirQualitySnapshot(
        aqi=aqi,
        iaqi=_parse_iaqi(data),
        station_name=city_block.get("name") or "",
        geo=_parse_geo(city_block),
        dominant_pollutant=data.get("dominentpol") or None,
        observed_at=_parse_timestamp(data.get("time")),
        source_url=source_url,
    )


class WAQIClient:
    """Station feed client. One GET per fetch(), no retry."""

    def __init__(self, settings: Settings, http: Optional[httpx.Client] = None):
        self._settings = settings
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=settings.request_timeout)

    @property
    def station_url(self) -> str:
        return f"{self._settings.waqi_base_url}/{self._settings.station}/"

    @property
    def redacted_url(self) -> str:
        return f"{self.station_url}?token=***"

    def fetch(self) -> Optional[AirQualitySnapshot]:
        """
        Fetch the latest feed for the configured station.

        Returns:
            AirQualitySnapshot or None on any failure.
        """
        station = self._settings.station

        try:
            resp = self._http.get(self.station_url, params={"token": self._settings.air_key})
            resp.raise_for_status()
        except httpx.TimeoutException:
            logger.error("WAQI request timed out for station %s", station)
            return None
        except httpx.HTTPStatusError as e:
            logger.error("WAQI HTTP error %s for station %s", e.response.status_code, station)
            return None
        except httpx.RequestError as e:
            logger.error("WAQI network error for station %s: %s", station, e)
            return None

        try:
            payload = resp.json()
        except ValueError:
            logger.error("WAQI returned malformed JSON for station %s", station)
            return None

        snapshot = parse_feed(payload, source_url=self.redacted_url)
        if snapshot is None:
            return None

        logger.info(
            "WAQI reading fetched for station %s (%s): AQI=%d, PM2.5=%s",
            station, snapshot.station_name or "unnamed",
            snapshot.aqi, snapshot.iaqi.get("pm25"),
        )
        return snapshot

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

"""Client for the open-meteo geocoding and forecast APIs.

Any failed request or malformed payload is reported as ``None``.
"""

import logging
import os
from typing import List, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

log = logging.getLogger(__name__)

GEOCODING_URL = os.getenv(
    "GEOCODING_URL", "https://geocoding-api.open-meteo.com/v1/search"
)
FORECAST_URL = os.getenv("FORECAST_URL", "https://api.open-meteo.com/v1/forecast")
TIMEOUT = 10


class LatLong(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., alias="latitude")
    lng: float = Field(..., alias="longitude")


class GeoResponse(BaseModel):
    results: List[LatLong]


class Hourly(BaseModel):
    time: List[str]
    temperature_2m: List[float]


class Forecast(BaseModel):
    date: str
    temperature: float


class WeatherResponse(BaseModel):
    hourly: Hourly

    def forecasts(self) -> List[Forecast]:
        return [
            Forecast(date=date, temperature=temperature)
            for date, temperature in zip(self.hourly.time, self.hourly.temperature_2m)
        ]


class OpenMeteo:
    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()

    def _get_json(self, url: str, params: dict):
        try:
            resp = self.session.get(url, params=params, timeout=TIMEOUT)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as exc:
            log.warning("request to %s failed: %s", url, exc)
            return None

    def lat_long(self, city: str) -> Optional[LatLong]:
        """Geocode ``city`` to its first match, if any."""
        payload = self._get_json(
            GEOCODING_URL,
            {"name": city, "count": 1, "language": "en", "format": "json"},
        )
        if payload is None:
            return None
        try:
            response = GeoResponse.model_validate(payload)
        except ValidationError:
            return None
        return next(iter(response.results), None)

    def forecast(self, lat_long: LatLong) -> Optional[WeatherResponse]:
        payload = self._get_json(
            FORECAST_URL,
            {
                "latitude": lat_long.lat,
                "longitude": lat_long.lng,
                "hourly": "temperature_2m",
            },
        )
        if payload is None:
            return None
        try:
            return WeatherResponse.model_validate(payload)
        except ValidationError as exc:
            log.warning("unexpected forecast payload: %s", exc)
            return None

"""
weather_service.py
------------------
Current conditions and a 5-day forecast from the OpenWeather REST API.

Public API
----------
WeatherService.get_current_weather(lat, lon) -> dict
WeatherService.get_forecast(lat, lon)        -> list[dict]

When no API key is configured, or the request fails for any reason, mock
Kerala data is returned instead. Neither method raises on network errors.
"""

import logging
import random
from datetime import datetime, timezone
from typing import Optional

import requests

logger = logging.getLogger(__name__)

_OWM_API = "https://api.openweathermap.org/data/2.5"

# Kochi
DEFAULT_LAT = 9.9312
DEFAULT_LON = 76.2673

_FORECAST_DAYS = 5
_MOCK_DAYS       = ["Mon", "Tue", "Wed", "Thu", "Fri"]
_MOCK_CONDITIONS = ["Sunny", "Partly Cloudy", "Rainy", "Cloudy", "Thunderstorm"]


class WeatherService:

    def __init__(
        self,
        api_key:  Optional[str] = None,
        base_url: str = _OWM_API,
        timeout:  float = 10,
        session:  Optional[requests.Session] = None,
        rng:      Optional[random.Random] = None,
    ):
        self.api_key  = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout  = timeout
        self._session = session or requests.Session()
        self._rng     = rng or random.Random()

    # ── HTTP ────────────────────────────────────────────────────────────────

    def _get(self, endpoint: str, lat: float, lon: float) -> dict:
        resp = self._session.get(
            f"{self.base_url}/{endpoint}",
            params={"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()

    # ── Public API ──────────────────────────────────────────────────────────

    def get_current_weather(self, lat: float = DEFAULT_LAT, lon: float = DEFAULT_LON) -> dict:
        if not self.api_key:
            return self.mock_current_weather()
        try:
            data = self._get("weather", lat, lon)
            return {
                "location":    data["name"],
                "temperature": data["main"]["temp"],
                "feels_like":  data["main"]["feels_like"],
                "humidity":    data["main"]["humidity"],
                "pressure":    data["main"]["pressure"],
                "wind_speed":  data["wind"]["speed"],
                "condition":   data["weather"][0]["description"],
                "icon":        data["weather"][0]["icon"],
            }
        except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as exc:
            logger.warning("get_current_weather(%s, %s) failed: %s", lat, lon, exc)
            return self.mock_current_weather()

    def get_forecast(self, lat: float = DEFAULT_LAT, lon: float = DEFAULT_LON) -> list:
        if not self.api_key:
            return self.mock_forecast()
        try:
            data = self._get("forecast", lat, lon)
            return fold_daily(data["list"])[:_FORECAST_DAYS]
        except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as exc:
            logger.warning("get_forecast(%s, %s) failed: %s", lat, lon, exc)
            return self.mock_forecast()

    # ── Mock data ───────────────────────────────────────────────────────────

    @staticmethod
    def mock_current_weather() -> dict:
        return {
            "location":    "Kochi, Kerala",
            "temperature": 28,
            "feels_like":  32,
            "humidity":    75,
            "pressure":    1013,
            "wind_speed":  3.2,
            "condition":   "Partly Cloudy",
            "icon":        "02d",
        }

    def mock_forecast(self) -> list:
        return [
            {
                "day":       day,
                "max_temp":  28 + self._rng.randrange(5),
                "min_temp":  22 + self._rng.randrange(3),
                "condition": _MOCK_CONDITIONS[idx],
            }
            for idx, day in enumerate(_MOCK_DAYS)
        ]


def fold_daily(entries: list) -> list:
    """
    Collapse OpenWeather 3-hourly forecast entries into one record per
    calendar date (UTC), keeping first-seen order. The condition of the
    first entry of each day is kept.
    """
    days: dict = {}
    for item in entries:
        stamp = datetime.fromtimestamp(item["dt"], tz=timezone.utc)
        key   = stamp.date()
        hi    = item["main"]["temp_max"]
        lo    = item["main"]["temp_min"]
        if key not in days:
            days[key] = {
                "day":       stamp.strftime("%a"),
                "max_temp":  hi,
                "min_temp":  lo,
                "condition": item["weather"][0]["description"],
            }
        else:
            days[key]["max_temp"] = max(days[key]["max_temp"], hi)
            days[key]["min_temp"] = min(days[key]["min_temp"], lo)
    return list(days.values())

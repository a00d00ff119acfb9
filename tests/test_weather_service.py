"""
Unit tests for the OpenWeather client and its mock fallback.
"""

from unittest.mock import MagicMock

import pytest
import requests

from weather_service import WeatherService, fold_daily

# 2024-06-03 00:00 UTC (Monday)
_MON = 1717372800
_HOUR = 3600


def _entry(ts, hi, lo, desc):
    return {"dt": ts, "main": {"temp_max": hi, "temp_min": lo}, "weather": [{"description": desc}]}


def _session_returning(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    session = MagicMock()
    session.get.return_value = resp
    return session


CURRENT_PAYLOAD = {
    "name": "Thrissur",
    "main": {"temp": 30.1, "feels_like": 34.0, "humidity": 80, "pressure": 1009},
    "wind": {"speed": 4.1},
    "weather": [{"description": "light rain", "icon": "10d"}],
}


class TestCurrentWeather:

    def test_mock_without_api_key(self):
        session = MagicMock()
        weather = WeatherService(session=session).get_current_weather(10.5, 76.2)
        assert weather["location"] == "Kochi, Kerala"
        assert weather["temperature"] == 28
        session.get.assert_not_called()

    def test_live_response_mapped(self):
        session = _session_returning(CURRENT_PAYLOAD)
        service = WeatherService(api_key="k", session=session)
        weather = service.get_current_weather(10.5, 76.2)
        assert weather == {
            "location": "Thrissur", "temperature": 30.1, "feels_like": 34.0,
            "humidity": 80, "pressure": 1009, "wind_speed": 4.1,
            "condition": "light rain", "icon": "10d",
        }
        url = session.get.call_args.args[0]
        params = session.get.call_args.kwargs["params"]
        assert url.endswith("/weather")
        assert params == {"lat": 10.5, "lon": 76.2, "appid": "k", "units": "metric"}

    def test_network_error_falls_back(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("offline")
        weather = WeatherService(api_key="k", session=session).get_current_weather(1, 2)
        assert weather == WeatherService.mock_current_weather()

    def test_http_error_falls_back(self):
        session = _session_returning({})
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("401")
        weather = WeatherService(api_key="bad", session=session).get_current_weather(1, 2)
        assert weather["location"] == "Kochi, Kerala"

    def test_malformed_payload_falls_back(self):
        session = _session_returning({"name": "X"})
        weather = WeatherService(api_key="k", session=session).get_current_weather(1, 2)
        assert weather["location"] == "Kochi, Kerala"


class TestForecast:

    def test_mock_forecast_shape(self):
        forecast = WeatherService().get_forecast()
        assert [d["day"] for d in forecast] == ["Mon", "Tue", "Wed", "Thu", "Fri"]
        for d in forecast:
            assert 28 <= d["max_temp"] <= 32
            assert 22 <= d["min_temp"] <= 24
        assert forecast[2]["condition"] == "Rainy"

    def test_fold_daily_aggregates_per_date(self):
        entries = [
            _entry(_MON, 29, 24, "clouds"),
            _entry(_MON + 3 * _HOUR, 31, 23, "rain"),
            _entry(_MON + 24 * _HOUR, 27, 22, "drizzle"),
        ]
        days = fold_daily(entries)
        assert days == [
            {"day": "Mon", "max_temp": 31, "min_temp": 23, "condition": "clouds"},
            {"day": "Tue", "max_temp": 27, "min_temp": 22, "condition": "drizzle"},
        ]

    def test_live_forecast_capped_at_five_days(self):
        entries = [_entry(_MON + d * 24 * _HOUR, 30, 22, "sun") for d in range(7)]
        session = _session_returning({"list": entries})
        forecast = WeatherService(api_key="k", session=session).get_forecast(9.9, 76.2)
        assert len(forecast) == 5
        assert session.get.call_args.args[0].endswith("/forecast")

    def test_timeout_falls_back(self):
        session = MagicMock()
        session.get.side_effect = requests.Timeout()
        forecast = WeatherService(api_key="k", session=session).get_forecast(9.9, 76.2)
        assert len(forecast) == 5
        assert forecast[0]["day"] == "Mon"

"""
Unit tests for mock market prices.
"""

import random
from datetime import date
from unittest.mock import MagicMock

import pytest

from market_service import MarketService


@pytest.fixture
def market():
    return MarketService(rng=random.Random(42))


class TestMarketPrices:

    def test_ten_crops_with_jitter_bounds(self, market):
        prices = market.get_market_prices()
        assert len(prices) == 10
        rice = prices[0]
        assert rice["crop"] == "Rice (Paddy)"
        assert rice["unit"] == "per kg"
        assert 27.5 <= rice["price"] <= 29.5
        assert 1.5 <= rice["change"] <= 3.5
        assert rice["last_updated"]

    def test_delay_is_simulated(self):
        sleep = MagicMock()
        MarketService(delay=1.0, sleep=sleep).get_market_prices()
        sleep.assert_called_once_with(1.0)

    def test_no_delay_by_default(self):
        sleep = MagicMock()
        MarketService(sleep=sleep).get_market_prices()
        sleep.assert_not_called()


class TestCropPrice:

    @pytest.mark.parametrize("name,crop", [
        ("paddy", "Rice (Paddy)"),
        ("PEPPER", "Pepper"),
        ("card", "Cardamom"),
    ])
    def test_substring_lookup(self, market, name, crop):
        assert market.get_crop_price(name)["crop"] == crop

    def test_unknown_crop(self, market):
        assert market.get_crop_price("durian") is None

    def test_blank_name(self, market):
        assert market.get_crop_price("  ") is None


class TestPriceHistory:

    def test_points_oldest_first(self, market):
        history = market.get_price_history("Pepper", days=3, today=date(2024, 6, 10))
        assert [p["date"] for p in history] == [
            "2024-06-07", "2024-06-08", "2024-06-09", "2024-06-10",
        ]
        assert all(445 <= p["price"] <= 455 for p in history)

    def test_default_thirty_days(self, market):
        assert len(market.get_price_history("rubber")) == 31

    def test_unknown_crop_uses_base_fifty(self, market):
        history = market.get_price_history("durian", days=5)
        assert all(45 <= p["price"] <= 55 for p in history)

    def test_zero_days_is_today_only(self, market):
        assert len(market.get_price_history("ginger", days=0)) == 1

    def test_negative_days_rejected(self, market):
        with pytest.raises(ValueError):
            market.get_price_history("ginger", days=-1)

"""
market_service.py
-----------------
Mock crop prices for Kerala markets.

Public API
----------
MarketService.get_market_prices()               -> list[dict]
MarketService.get_crop_price(name)              -> dict | None
MarketService.get_price_history(name, days=30)  -> list[dict]

Prices are the base table below with a little random jitter on every call.
"""

from __future__ import annotations

import logging
import random
import time
from datetime import date, datetime, timedelta, timezone
from typing import Optional

logger = logging.getLogger(__name__)

# ── Base price table ──────────────────────────────────────────────────────────
_BASE_PRICES = [
    {"crop": "Rice (Paddy)", "price":   28.50, "unit": "per kg",    "change":  2.5},
    {"crop": "Coconut",      "price":   12.00, "unit": "per piece", "change": -1.2},
    {"crop": "Banana",       "price":   35.00, "unit": "per dozen", "change":  5.8},
    {"crop": "Rubber",       "price":  180.00, "unit": "per kg",    "change":  0.0},
    {"crop": "Pepper",       "price":  450.00, "unit": "per kg",    "change": -3.2},
    {"crop": "Cardamom",     "price": 1200.00, "unit": "per kg",    "change":  8.5},
    {"crop": "Cashew",       "price":  320.00, "unit": "per kg",    "change":  1.8},
    {"crop": "Tapioca",      "price":   18.00, "unit": "per kg",    "change": -2.1},
    {"crop": "Ginger",       "price":   85.00, "unit": "per kg",    "change":  4.2},
    {"crop": "Turmeric",     "price":   95.00, "unit": "per kg",    "change": -1.5},
]

# Half-widths of the uniform jitter bands
_PRICE_JITTER   = 1.0
_CHANGE_JITTER  = 1.0
_HISTORY_JITTER = 5.0
# Base used for crops not in the table
_UNKNOWN_BASE_PRICE = 50.0


class MarketService:

    def __init__(self, delay: float = 0.0, rng: Optional[random.Random] = None, sleep=time.sleep):
        self.delay  = delay
        self._rng   = rng or random.Random()
        self._sleep = sleep

    def _jitter(self, half_width: float) -> float:
        return (self._rng.random() - 0.5) * 2 * half_width

    @staticmethod
    def _find_base(name: str) -> Optional[dict]:
        needle = name.lower()
        for item in _BASE_PRICES:
            if needle in item["crop"].lower():
                return item
        return None

    # ── Public API ────────────────────────────────────────────────────────────

    def get_market_prices(self) -> list[dict]:
        if self.delay > 0:
            self._sleep(self.delay)
        now = datetime.now(timezone.utc).isoformat()
        return [
            {
                **item,
                "price":        round(item["price"] + self._jitter(_PRICE_JITTER), 2),
                "change":       round(item["change"] + self._jitter(_CHANGE_JITTER), 2),
                "last_updated": now,
            }
            for item in _BASE_PRICES
        ]

    def get_crop_price(self, name: str) -> Optional[dict]:
        """First crop whose name contains *name* (case-insensitive), or None."""
        needle = name.strip().lower()
        if not needle:
            return None
        for item in self.get_market_prices():
            if needle in item["crop"].lower():
                return item
        return None

    def get_price_history(self, name: str, days: int = 30, today: Optional[date] = None) -> list[dict]:
        """
        Return ``days + 1`` daily points ending on *today*, oldest first.
        Unknown crops are priced around a base of 50.
        """
        if days < 0:
            raise ValueError(f"days must be >= 0, got {days}")
        base_item = self._find_base(name.strip()) if name.strip() else None
        base = base_item["price"] if base_item else _UNKNOWN_BASE_PRICE
        if base_item is None:
            logger.info("get_price_history: unknown crop '%s', using base %.2f", name, base)

        today = today or datetime.now(timezone.utc).date()
        return [
            {
                "date":  (today - timedelta(days=offset)).isoformat(),
                "price": round(base + self._jitter(_HISTORY_JITTER), 2),
            }
            for offset in range(days, -1, -1)
        ]

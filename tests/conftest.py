"""
Farming Assistant Test Configuration and Fixtures

This module provides:
- Test environment (no chat latency, no weather API key)
- Flask test client
- Small knowledge tables and randomness stubs for the matcher
"""

import os
import sys
import random

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set test environment
os.environ["CHAT_MIN_DELAY"] = "0"
os.environ["CHAT_MAX_DELAY"] = "0"
os.environ.pop("OPENWEATHER_API_KEY", None)
os.environ.pop("CHAT_KNOWLEDGE_FILE", None)

from chat_engine import Category, KnowledgeBase


class FirstChoice:
    """Randomness stub that always picks the first element."""

    def choice(self, seq):
        return seq[0]


class LastChoice:
    def choice(self, seq):
        return seq[-1]


class BrokenChoice:
    def choice(self, seq):
        raise RuntimeError("entropy source unavailable")


# =============================================================================
# Matcher Fixtures
# =============================================================================

@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def tiny_knowledge():
    """Two overlapping categories so priority order is observable."""
    return KnowledgeBase(
        categories=[
            Category("coconut", ["coconut", "tender"], ["coconut-a", "coconut-b"]),
            Category("banana", ["banana", "tender"], ["banana-a"]),
        ],
        default_responses=["default-a", "default-b"],
    )


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setenv("FARM_SETTINGS_FILE", str(path))
    return path


@pytest.fixture
def app(settings_file):
    from app import app as flask_app
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client

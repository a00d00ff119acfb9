"""
settings_store.py
=================
Persists the one user preference the assistant keeps: UI language.

Storage format: data/settings.json (or $FARM_SETTINGS_FILE):
{
    "language": "en" | "ml" | "hi"
}

Public API
----------
get_language()      -> str
set_language(code)  -> str
"""

from __future__ import annotations

import json
import logging
import os

logger = logging.getLogger(__name__)

# code -> (English name, native name)
SUPPORTED_LANGUAGES: dict[str, tuple[str, str]] = {
    "en": ("English",   "English"),
    "ml": ("Malayalam", "മലയാളം"),
    "hi": ("Hindi",     "हिन्दी"),
}
DEFAULT_LANGUAGE = "en"

_DEFAULT_FILE = os.path.join(os.path.dirname(__file__), "data", "settings.json")


def _settings_path() -> str:
    return os.environ.get("FARM_SETTINGS_FILE") or _DEFAULT_FILE


# ── Low-level I/O helpers ─────────────────────────────────────────────────────

def _read_settings(path: str) -> dict:
    """
    Read the settings object from *path*.
    Returns {} if file is missing, empty, or corrupt.
    """
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            content = fh.read().strip()
        if not content:
            return {}
        data = json.loads(content)
        return data if isinstance(data, dict) else {}
    except (OSError, ValueError) as exc:
        logger.error("_read_settings(%s) failed: %s", path, exc)
        return {}


def _write_settings(path: str, settings: dict) -> None:
    """Write *settings* via temp-then-rename so a crash cannot corrupt the file."""
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    tmp_path = path + ".tmp"
    try:
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(settings, fh, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
    except OSError:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


# ── Public API ────────────────────────────────────────────────────────────────

def get_language() -> str:
    code = _read_settings(_settings_path()).get("language")
    if not isinstance(code, str) or code not in SUPPORTED_LANGUAGES:
        return DEFAULT_LANGUAGE
    return code


def set_language(code: str) -> str:
    """
    Store *code* as the selected language and return it.
    Raises ValueError for an unsupported code.
    """
    if not isinstance(code, str) or code.strip().lower() not in SUPPORTED_LANGUAGES:
        raise ValueError(
            f"Unsupported language {code!r}. Choose one of: "
            + ", ".join(SUPPORTED_LANGUAGES)
        )
    code = code.strip().lower()
    path = _settings_path()
    settings = _read_settings(path)
    settings["language"] = code
    _write_settings(path, settings)
    logger.info("Language set to %s", code)
    return code

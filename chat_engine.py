"""
chat_engine.py  –  Farming Assistant keyword responder
=======================================================
Picks a canned farming reply for a free-text question.

Matching pipeline:
  1. Lower-case the message
  2. Walk the categories in declaration order; the first category with any
     keyword contained in the message wins
  3. Random reply from that category's pool, else from the default pool

Keywords are plain substrings, not tokens, so "rain" also fires on "brain".
That is expected behaviour.
"""

from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass
from typing import Any, Optional, Sequence

logger = logging.getLogger(__name__)


class InvalidInput(TypeError):
    """Raised when the matcher is handed something that is not a string."""


# ═══════════════════════════════════════════════════════════════════════════
#  DATA MODEL
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Category:
    name:      str
    keywords:  tuple
    responses: tuple

    def __post_init__(self):
        for field in ("keywords", "responses"):
            if isinstance(getattr(self, field), str):
                raise ValueError(f"Category '{self.name}' {field} must be a sequence, not a str.")
        object.__setattr__(self, "keywords", tuple(self.keywords))
        object.__setattr__(self, "responses", tuple(self.responses))
        if not self.name:
            raise ValueError("Category name must be non-empty.")
        if not self.responses:
            raise ValueError(f"Category '{self.name}' has no responses.")

    def matches(self, lowered: str) -> bool:
        # empty keywords would match everything
        return any(kw and kw.lower() in lowered for kw in self.keywords)


@dataclass(frozen=True)
class KnowledgeBase:
    """Ordered category table plus the fallback pool. Order is priority."""

    categories:        tuple
    default_responses: tuple

    def __post_init__(self):
        if isinstance(self.default_responses, str):
            raise ValueError("Default responses must be a sequence, not a str.")
        object.__setattr__(self, "categories", tuple(self.categories))
        object.__setattr__(self, "default_responses", tuple(self.default_responses))
        seen: set[str] = set()
        for cat in self.categories:
            if cat.name in seen:
                raise ValueError(f"Duplicate category name: '{cat.name}'")
            seen.add(cat.name)
        if not self.default_responses:
            raise ValueError("Default response pool must be non-empty.")

    def category(self, name: str) -> Optional[Category]:
        for cat in self.categories:
            if cat.name == name:
                return cat
        return None


# ═══════════════════════════════════════════════════════════════════════════
#  KNOWLEDGE BASE
# ═══════════════════════════════════════════════════════════════════════════
FARMING_KNOWLEDGE = KnowledgeBase(
    categories=(

        # ── Rice ─────────────────────────────────────────────────────────────
        Category(
            name="rice",
            keywords=("rice", "paddy", "അരി", "चावल"),
            responses=(
                "Rice is a staple crop in Kerala. For best results, plant during the "
                "monsoon season (June-July). Use organic fertilizers and ensure proper "
                "water management.",
                "Rice cultivation requires 20-25°C temperature and 100-150cm rainfall. "
                "Use certified seeds and practice crop rotation.",
            ),
        ),

        # ── Weather ──────────────────────────────────────────────────────────
        Category(
            name="weather",
            keywords=("weather", "rain", "monsoon", "കാലാവസ്ഥ", "മഴ", "मौसम", "बारिश"),
            responses=(
                "Check the weather tab for current conditions. Kerala has two monsoons - "
                "Southwest (June-September) and Northeast (October-November).",
                "Monitor rainfall patterns for optimal planting times. Too much rain can "
                "cause waterlogging.",
            ),
        ),

        # ── Fertilizer ───────────────────────────────────────────────────────
        Category(
            name="fertilizer",
            keywords=("fertilizer", "manure", "organic", "വളം", "उर्वरक", "खाद"),
            responses=(
                "Use organic fertilizers like cow dung, compost, and green manure. Avoid "
                "chemical fertilizers for better soil health.",
                "Apply fertilizers based on soil test results. Organic farming improves "
                "soil fertility over time.",
            ),
        ),

        # ── Pests & disease ──────────────────────────────────────────────────
        Category(
            name="pest",
            keywords=("pest", "disease", "insect", "കീടം", "रोग", "कीट"),
            responses=(
                "Use neem oil, garlic spray, or other organic pest control methods. "
                "Regular monitoring helps prevent pest outbreaks.",
                "Practice crop rotation and maintain field hygiene to reduce pest problems.",
            ),
        ),

        # ── Market prices ────────────────────────────────────────────────────
        Category(
            name="market",
            keywords=("price", "market", "selling", "വില", "വിപണി", "मूल्य", "बाजार"),
            responses=(
                "Check the market prices tab for current rates. Sell during peak demand "
                "periods for better prices.",
                "Consider direct selling to consumers or cooperatives for better margins.",
            ),
        ),

        # ── Government schemes ───────────────────────────────────────────────
        Category(
            name="subsidy",
            keywords=("subsidy", "scheme", "government", "സബ്സിഡി", "सब्सिडी", "योजना"),
            responses=(
                "Check the subsidy tab for available government schemes. Many programs "
                "support organic farming and modern techniques.",
                "Apply for PM-KISAN, soil health cards, and other beneficial schemes.",
            ),
        ),
    ),

    # Fallback responses
    default_responses=(
        "I can help you with farming advice, weather information, market prices, and "
        "government schemes. What specific topic would you like to know about?",
        "As your farming assistant, I can provide guidance on crop cultivation, pest "
        "management, weather patterns, and more. How can I assist you?",
        "Feel free to ask me about rice cultivation, organic farming, weather updates, "
        "market prices, or government subsidies. What would you like to know?",
        "I'm here to help with all your farming needs. You can ask about crops, "
        "weather, pests, fertilizers, market prices, or government schemes.",
    ),
)


# ═══════════════════════════════════════════════════════════════════════════
#  LOADING
# ═══════════════════════════════════════════════════════════════════════════

def _string_list(value: Any, field: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{field}' must be a list of strings.")
    return value


def knowledge_from_dict(data: dict) -> KnowledgeBase:
    """
    Build a KnowledgeBase from ``{"categories": [...], "defaultResponses": [...]}``.
    Each category is ``{"name": str, "keywords": [str], "responses": [str]}``.
    Raises ValueError on any structural problem.
    """
    if not isinstance(data, dict):
        raise ValueError("Knowledge data must be a JSON object.")

    raw_categories = data.get("categories", [])
    if not isinstance(raw_categories, list):
        raise ValueError("'categories' must be a list.")

    categories = []
    for idx, item in enumerate(raw_categories):
        if not isinstance(item, dict):
            raise ValueError(f"categories[{idx}] must be an object.")
        name = item.get("name")
        if not isinstance(name, str):
            raise ValueError(f"categories[{idx}].name must be a string.")
        categories.append(Category(
            name      = name,
            keywords  = _string_list(item.get("keywords", []), f"{name}.keywords"),
            responses = _string_list(item.get("responses", []), f"{name}.responses"),
        ))

    defaults = _string_list(data.get("defaultResponses", []), "defaultResponses")
    return KnowledgeBase(categories=categories, default_responses=defaults)


def load_knowledge(path: str) -> KnowledgeBase:
    """Read a knowledge table from a UTF-8 JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Knowledge file {path} is not valid JSON: {exc}") from exc
    kb = knowledge_from_dict(data)
    logger.info("Loaded %d chat categories from %s", len(kb.categories), path)
    return kb


# ═══════════════════════════════════════════════════════════════════════════
#  MATCHER
# ═══════════════════════════════════════════════════════════════════════════

class ResponseMatcher:
    """
    Stateless keyword responder over an immutable KnowledgeBase.

    *rng* is anything with a ``choice(seq)`` method; tests pass a seeded
    ``random.Random`` or a stub.
    """

    def __init__(self, knowledge: KnowledgeBase = FARMING_KNOWLEDGE, rng=None):
        self.knowledge = knowledge
        self._rng = rng if rng is not None else random.Random()

    def match_category(self, message: str) -> Optional[Category]:
        """Return the first category whose keywords occur in *message*, or None."""
        if not isinstance(message, str):
            raise InvalidInput(
                f"message must be a str, got {type(message).__name__}"
            )
        lowered = message.lower()
        for cat in self.knowledge.categories:
            if cat.matches(lowered):
                return cat
        return None

    def _pick(self, pool: Sequence[str]) -> str:
        try:
            return self._rng.choice(pool)
        except Exception as exc:
            logger.warning("Random choice failed, using first response: %s", exc)
            return pool[0]

    def respond(self, message: str) -> str:
        cat = self.match_category(message)
        if cat is None:
            logger.debug("No category matched; using default pool")
            return self._pick(self.knowledge.default_responses)
        logger.debug("Matched category '%s'", cat.name)
        return self._pick(cat.responses)

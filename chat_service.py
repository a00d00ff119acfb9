"""
chat_service.py
---------------
Chat front door used by the API. Validates the message, waits a short random
delay to mimic a remote assistant, then asks the shared ResponseMatcher.

The delay is owned here, never by the matcher.
"""

import logging
import random
import time
from typing import Callable, Optional

from chat_engine import ResponseMatcher

logger = logging.getLogger(__name__)

# Default latency window in seconds (1–3 s)
DEFAULT_MIN_DELAY = 1.0
DEFAULT_MAX_DELAY = 3.0


class EmptyMessage(ValueError):
    """Raised for blank or whitespace-only chat input."""


class ChatService:

    def __init__(
        self,
        matcher:   Optional[ResponseMatcher] = None,
        min_delay: float = DEFAULT_MIN_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        sleep:     Callable[[float], None] = time.sleep,
        rng:       Optional[random.Random] = None,
    ):
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError(
                f"Invalid delay window: min={min_delay} max={max_delay}"
            )
        self.matcher   = matcher or ResponseMatcher()
        self.min_delay = min_delay
        self.max_delay = max_delay
        self._sleep    = sleep
        self._rng      = rng or random.Random()

    def _delay(self) -> float:
        return self.min_delay + self._rng.random() * (self.max_delay - self.min_delay)

    def send_message(self, message: str) -> str:
        """
        Return the assistant's reply to *message*.

        Raises EmptyMessage for blank input and chat_engine.InvalidInput
        for non-string input.
        """
        if isinstance(message, str):
            message = message.strip()
            if not message:
                raise EmptyMessage("Message must not be empty.")

        reply = self.matcher.respond(message)

        delay = self._delay()
        if delay > 0:
            self._sleep(delay)
        logger.info("chat: replied to %d-char message after %.2fs", len(message), delay)
        return reply

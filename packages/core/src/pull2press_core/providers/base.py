"""Base generator implementing the Template Method pattern.

All providers share the same contract:
    generate()        → _validate() → _call_api()     ← differs per provider
    generate_stream() → _validate() → _stream_api()   ← differs per provider

Subclasses implement three things only:
  - __init__: validate credentials and store the client
  - _call_api: one request, return the full text
  - _stream_api: one request, yield text deltas as they arrive

There is no retry here: a generation is a single attempt and the caller
decides whether to surface the error. Subclasses translate non-success
statuses into UpstreamError / RateLimitError and let network errors
propagate unwrapped.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterator

from pull2press_core.errors import InvalidInputError

logger = logging.getLogger(__name__)

_MAX_TOKENS = 2000


class BaseGenerator(ABC):
    NAME: str = "base"
    MODEL: str = ""
    MAX_TOKENS: int = _MAX_TOKENS

    def __init__(self, model: str | None = None):
        self.model = model or self.MODEL

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def generate(self, system_prompt: str, user_prompt: str, temperature: float = 0.7) -> str:
        """Return the complete generated text for one system/user prompt pair."""
        self._validate(system_prompt, user_prompt)
        logger.debug("%s: generating with model=%s temperature=%.2f", self.__class__.__name__, self.model, temperature)
        return self._call_api(system_prompt, user_prompt, temperature)

    def generate_stream(self, system_prompt: str, user_prompt: str, temperature: float = 0.7) -> Iterator[str]:
        """Yield text deltas as the model produces them.

        Validation happens eagerly, before the first next(), so a bad call
        fails at the call site rather than on first iteration. Abandoning the
        iterator early closes the underlying response; nothing is sent upstream.
        """
        self._validate(system_prompt, user_prompt)
        logger.debug("%s: streaming with model=%s temperature=%.2f", self.__class__.__name__, self.model, temperature)
        return self._stream_api(system_prompt, user_prompt, temperature)

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        """Make a single API call and return the generated text."""

    @abstractmethod
    def _stream_api(self, system_prompt: str, user_prompt: str, temperature: float) -> Iterator[str]:
        """Make a single streaming API call and yield text deltas."""

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _validate(system_prompt: str, user_prompt: str) -> None:
        if not system_prompt or not system_prompt.strip():
            raise InvalidInputError("systemPrompt must not be empty")
        if not user_prompt or not user_prompt.strip():
            raise InvalidInputError("userPrompt must not be empty")

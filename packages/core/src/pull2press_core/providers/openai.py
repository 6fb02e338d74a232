from __future__ import annotations

from typing import Iterator

import openai

from pull2press_core.errors import ConfigurationError, RateLimitError, UpstreamError
from pull2press_core.providers.base import BaseGenerator


class OpenAIGenerator(BaseGenerator):
    NAME = "openai"
    MODEL = "gpt-4o"

    def __init__(self, api_key: str | None, model: str | None = None):
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY environment variable is not set.")
        super().__init__(model)
        self.client = openai.OpenAI(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=self._messages(system_prompt, user_prompt),
                temperature=temperature,
                max_tokens=self.MAX_TOKENS,
            )
        except openai.APIStatusError as e:
            raise _translate(e) from e
        return response.choices[0].message.content or ""

    def _stream_api(self, system_prompt: str, user_prompt: str, temperature: float) -> Iterator[str]:
        try:
            stream = self.client.chat.completions.create(
                model=self.model,
                messages=self._messages(system_prompt, user_prompt),
                temperature=temperature,
                max_tokens=self.MAX_TOKENS,
                stream=True,
            )
        except openai.APIStatusError as e:
            raise _translate(e) from e

        try:
            for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    yield delta
        finally:
            stream.close()

    @staticmethod
    def _messages(system_prompt: str, user_prompt: str) -> list[dict]:
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]


def _translate(e: openai.APIStatusError) -> UpstreamError:
    if isinstance(e, openai.RateLimitError):
        return RateLimitError(f"OpenAI rate limit exceeded: {e.message}", status=e.status_code)
    return UpstreamError(f"OpenAI API error ({e.status_code}): {e.message}", status=e.status_code)

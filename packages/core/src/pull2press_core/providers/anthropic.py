from __future__ import annotations

from typing import Iterator

from pull2press_core.errors import ConfigurationError, RateLimitError, UpstreamError
from pull2press_core.providers.base import BaseGenerator


class AnthropicGenerator(BaseGenerator):
    NAME = "anthropic"
    MODEL = "claude-sonnet-4-20250514"

    def __init__(self, api_key: str | None, model: str | None = None):
        if not api_key:
            raise ConfigurationError("ANTHROPIC_API_KEY environment variable is not set.")
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError(
                "The 'anthropic' package is required for this provider. "
                "Install it with: pip install 'pull2press[anthropic]'"
            )
        super().__init__(model)
        self.client = Anthropic(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        # Imported inside the method because the anthropic package is optional;
        # __init__ already validated it is installed before we reach here.
        import anthropic
        from anthropic.types import TextBlock

        try:
            response = self.client.messages.create(
                model=self.model,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=temperature,
                max_tokens=self.MAX_TOKENS,
            )
        except anthropic.APIStatusError as e:
            raise _translate(e) from e
        text_blocks = [block.text for block in response.content if isinstance(block, TextBlock)]
        return "".join(text_blocks).strip()

    def _stream_api(self, system_prompt: str, user_prompt: str, temperature: float) -> Iterator[str]:
        import anthropic

        try:
            with self.client.messages.stream(
                model=self.model,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=temperature,
                max_tokens=self.MAX_TOKENS,
            ) as stream:
                for text in stream.text_stream:
                    if text:
                        yield text
        except anthropic.APIStatusError as e:
            raise _translate(e) from e


def _translate(e) -> UpstreamError:
    import anthropic

    if isinstance(e, anthropic.RateLimitError):
        return RateLimitError(f"Anthropic rate limit exceeded: {e.message}", status=e.status_code)
    return UpstreamError(f"Anthropic API error ({e.status_code}): {e.message}", status=e.status_code)

"""Generation through an HTTP proxy function instead of a vendor SDK.

The proxy holds the model credential server-side (see pull2press_server),
so the client only needs the proxy's base URL and, optionally, a bearer key.

    POST {base}/generate-content          {systemPrompt, userPrompt, temperature} → {content}
    POST {base}/generate-content/stream   same body → text/event-stream of deltas
"""

from __future__ import annotations

import logging
from typing import Iterator

import requests

from pull2press_core.errors import ConfigurationError, RateLimitError, UpstreamError
from pull2press_core.providers.base import BaseGenerator
from pull2press_core.utils.sse import iter_text_deltas

logger = logging.getLogger(__name__)

_TIMEOUT = 120


class ProxyGenerator(BaseGenerator):
    NAME = "proxy"
    MODEL = "proxy-default"

    def __init__(self, base_url: str | None, api_key: str | None = None, session: requests.Session | None = None):
        if not base_url:
            raise ConfigurationError(
                "No generation proxy configured. Set PULL2PRESS_PROXY_URL or proxy_url in .pull2press.yml."
            )
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if api_key:
            self.session.headers["Authorization"] = f"Bearer {api_key}"

    def _call_api(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        response = self.session.post(
            f"{self.base_url}/generate-content",
            json=self._body(system_prompt, user_prompt, temperature),
            timeout=_TIMEOUT,
        )
        if not response.ok:
            raise _error_from(response)
        return response.json().get("content", "")

    def _stream_api(self, system_prompt: str, user_prompt: str, temperature: float) -> Iterator[str]:
        response = self.session.post(
            f"{self.base_url}/generate-content/stream",
            json=self._body(system_prompt, user_prompt, temperature),
            timeout=_TIMEOUT,
            stream=True,
        )
        try:
            if not response.ok:
                raise _error_from(response)
            response.encoding = response.encoding or "utf-8"
            yield from iter_text_deltas(response.iter_content(chunk_size=None, decode_unicode=True))
        finally:
            response.close()

    @staticmethod
    def _body(system_prompt: str, user_prompt: str, temperature: float) -> dict:
        return {"systemPrompt": system_prompt, "userPrompt": user_prompt, "temperature": temperature}


def _error_from(response: requests.Response) -> UpstreamError:
    try:
        detail = response.json().get("error") or response.text
    except (ValueError, AttributeError):
        detail = response.text
    logger.debug("Proxy returned %d: %s", response.status_code, detail)
    if response.status_code == 429:
        return RateLimitError(f"Generation proxy rate limit exceeded: {detail}", status=429)
    return UpstreamError(f"Generation proxy error ({response.status_code}): {detail}", status=response.status_code)

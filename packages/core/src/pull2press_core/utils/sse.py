"""Incremental decoding of streamed generation bodies into text deltas.

`pull2press serve` streams raw text deltas with no framing. Other proxies
may send SSE frames instead: ``data: {"content": "..."}``, OpenAI-style
``data: {"choices": [{"delta": {"content": "..."}}]}``, or ``data: raw text``,
terminated by ``data: [DONE]``.

Unless the caller says which it is, a body counts as SSE only when it opens
with a ``data:`` field; anything else is passed through verbatim, so raw text
starting with ``:``, ``id:`` or ``event:`` is not mistaken for framing. Chunks
may split an SSE frame anywhere, so SSE lines are buffered until their
newline arrives. A ``data: {"error": ...}`` frame raises UpstreamError.
"""

from __future__ import annotations

import json
from typing import Iterable, Iterator, Optional

from pull2press_core.errors import UpstreamError

_SSE_MARKER = "data:"


def iter_text_deltas(chunks: Iterable[str], sse: Optional[bool] = None) -> Iterator[str]:
    """Yield text deltas from ``chunks``. ``sse`` forces the framing; None detects it."""
    buffer = ""
    is_sse = sse

    for chunk in chunks:
        if not chunk:
            continue
        if is_sse is None:
            probe = (buffer + chunk).lstrip()
            if len(probe) < len(_SSE_MARKER) and _SSE_MARKER.startswith(probe):
                buffer += chunk
                continue
            is_sse = probe.startswith(_SSE_MARKER)
            if not is_sse:
                yield buffer + chunk
                buffer = ""
                continue
        elif not is_sse:
            yield chunk
            continue

        buffer += chunk
        complete, buffer = _split_complete(buffer)
        for line in complete:
            delta = parse_sse_line(line)
            if delta:
                yield delta

    if is_sse is None:
        # Short body that never settled the framing: treat as raw text.
        if buffer:
            yield buffer
    elif is_sse and buffer.strip():
        delta = parse_sse_line(buffer)
        if delta:
            yield delta


def parse_sse_line(line: str) -> str | None:
    """Return the text delta carried by one SSE line, or None for framing/control lines."""
    line = line.rstrip("\r")
    if not line.startswith("data:"):
        return None
    data = line[5:]
    if data.startswith(" "):
        data = data[1:]
    if data == "[DONE]":
        return None
    try:
        payload = json.loads(data)
    except ValueError:
        return data
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        if payload.get("error"):
            raise UpstreamError(f"Stream interrupted: {payload['error']}")
        if isinstance(payload.get("content"), str):
            return payload["content"]
        choices = payload.get("choices") or []
        if choices:
            return (choices[0].get("delta") or {}).get("content")
        return None
    return data


def _split_complete(buffer: str) -> tuple[list[str], str]:
    *complete, rest = buffer.split("\n")
    return complete, rest

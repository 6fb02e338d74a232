"""Inline writing assistant: rewrite a selected passage of a post on request.

The generator interface takes exactly one system and one user prompt, so the
conversation so far is rendered into the user prompt as a short transcript.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Literal

from pull2press_core.errors import InvalidInputError
from pull2press_core.providers.base import BaseGenerator

EDITOR_SYSTEM_PROMPT = """You are an AI writing assistant integrated into a blog editor.
When given text and instructions, provide helpful improvements, corrections, or additions.
Be concise and directly provide the improved text without excessive explanation.
Maintain the original tone and style unless specifically asked to change it."""

_CHARS_PER_TOKEN = 4


@dataclass
class ChatMessage:
    role: Literal["user", "assistant", "system"]
    content: str


def estimate_token_count(text: str) -> int:
    """Rough display-only estimate: about four characters per token."""
    return math.ceil(len(text) / _CHARS_PER_TOKEN)


class ConversationContext:
    """Bounded history of user/assistant turns.

    Keeps the last ``max_messages`` pairs, i.e. ``2 * max_messages`` messages.
    """

    def __init__(self, max_messages: int = 5):
        self.max_messages = max_messages
        self._messages: list[ChatMessage] = []

    def add_message(self, message: ChatMessage) -> None:
        self._messages.append(message)
        limit = self.max_messages * 2
        if len(self._messages) > limit:
            self._messages = self._messages[-limit:]

    def get_messages(self) -> list[ChatMessage]:
        return list(self._messages)

    def clear(self) -> None:
        self._messages = []

    def total_tokens(self) -> int:
        return sum(estimate_token_count(m.content) for m in self._messages)


def build_edit_prompt(selected_text: str, instruction: str, history: list[ChatMessage] | None = None) -> str:
    request = f'Selected text: "{selected_text}"\n\nInstruction: {instruction}'
    if not history:
        return request
    transcript = "\n\n".join(f"{m.role.capitalize()}: {m.content}" for m in history)
    return f"Previous conversation:\n\n{transcript}\n\n---\n\n{request}"


def stream_edit(
    selected_text: str,
    instruction: str,
    generator: BaseGenerator,
    context: ConversationContext | None = None,
    system_prompt: str = EDITOR_SYSTEM_PROMPT,
    temperature: float = 0.7,
) -> Iterator[str]:
    """Stream the assistant's rewrite of ``selected_text``.

    When a context is given, both turns are recorded in it once the stream
    has been fully consumed.
    """
    if not instruction or not instruction.strip():
        raise InvalidInputError("An instruction is required")

    history = context.get_messages() if context is not None else None
    prompt = build_edit_prompt(selected_text, instruction, history)
    chunks = generator.generate_stream(system_prompt, prompt, temperature)
    return _record(chunks, context, prompt_turn=f'Selected text: "{selected_text}"\n\nInstruction: {instruction}')


def _record(chunks: Iterator[str], context: ConversationContext | None, prompt_turn: str) -> Iterator[str]:
    reply: list[str] = []
    for chunk in chunks:
        reply.append(chunk)
        yield chunk
    if context is not None:
        context.add_message(ChatMessage(role="user", content=prompt_turn))
        context.add_message(ChatMessage(role="assistant", content="".join(reply)))

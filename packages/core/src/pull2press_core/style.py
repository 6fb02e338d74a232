"""Heuristic writing-style inference from a user's prior writing samples.

A fixed-threshold classifier whose output only steers prompt wording.
Same samples in, same WritingStyle out.
"""

from __future__ import annotations

import re

from pull2press_core.models import WritingStyle

_CASUAL_MARKERS = re.compile(r"\b(gonna|wanna|kinda|sorta|hey|awesome|cool|stuff)\b", re.IGNORECASE)
_TECHNICAL_MARKERS = re.compile(
    r"\b(implementation|architecture|algorithm|optimization|refactor|middleware|abstraction)\b",
    re.IGNORECASE,
)
# A tone only wins when it clearly dominates; a handful of incidental
# "cool"s should not make a professional sample casual.
_TONE_THRESHOLD = 3

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_NUMBERED_LIST = re.compile(r"^\d+\.", re.MULTILINE)
_BULLET = re.compile(r"^[-*+]", re.MULTILINE)
_HEADING = re.compile(r"^#{1,6}\s", re.MULTILINE)
_STEP_WORDS = re.compile(r"\b(first|second|then|next|finally|step|begin by)\b", re.IGNORECASE)

_CODE_BLOCK = re.compile(r"```[\s\S]*?```")
_INLINE_CODE = re.compile(r"`[^`]+`")
_CODE_COMMENT = re.compile(r"//.*|/\*[\s\S]*?\*/")

_COMPLEX_WORD_LEN = 8
_ADVANCED_RATIO = 0.15
_INTERMEDIATE_RATIO = 0.08

DEFAULT_STYLE = WritingStyle(
    tone="professional",
    avg_sentence_length=20,
    vocabulary_level="intermediate",
    structure_preference="structured",
    code_example_style="detailed",
)


def analyze_writing_style(samples: list[str]) -> WritingStyle:
    """Infer tone, vocabulary, structure and code-example habits from samples.

    Returns a copy of DEFAULT_STYLE when there are no samples.
    """
    if not samples:
        return WritingStyle(**vars(DEFAULT_STYLE))

    text = "\n".join(samples)
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    words = text.split()

    avg_sentence_length = len(words) / len(sentences) if sentences else 20

    casual = len(_CASUAL_MARKERS.findall(text))
    technical = len(_TECHNICAL_MARKERS.findall(text))
    tone = "professional"
    if casual > technical and casual > _TONE_THRESHOLD:
        tone = "casual"
    elif technical > casual and technical > _TONE_THRESHOLD:
        tone = "technical"

    complex_ratio = sum(1 for w in words if len(w) > _COMPLEX_WORD_LEN) / len(words) if words else 0.0
    if complex_ratio > _ADVANCED_RATIO:
        vocabulary_level = "advanced"
    elif complex_ratio > _INTERMEDIATE_RATIO:
        vocabulary_level = "intermediate"
    else:
        vocabulary_level = "simple"

    structure_preference = "narrative"
    if _STEP_WORDS.search(text) or _NUMBERED_LIST.search(text):
        structure_preference = "tutorial"
    elif _BULLET.search(text) or _HEADING.search(text):
        structure_preference = "structured"

    code_blocks = len(_CODE_BLOCK.findall(text))
    inline_code = len(_INLINE_CODE.findall(text))
    code_comments = len(_CODE_COMMENT.findall(text))
    code_example_style = "detailed"
    if code_comments > code_blocks:
        code_example_style = "annotated"
    elif inline_code > code_blocks * 2:
        code_example_style = "minimal"

    return WritingStyle(
        tone=tone,
        avg_sentence_length=avg_sentence_length,
        vocabulary_level=vocabulary_level,
        structure_preference=structure_preference,
        code_example_style=code_example_style,
    )


_TONE_GUIDANCE = {
    "casual": (
        "Use a casual, conversational tone. Write as if explaining to a friend or colleague. "
        "Use contractions and speak directly to the reader."
    ),
    "technical": (
        "Use precise technical language and focus on implementation details, "
        "architectural decisions, and technical concepts."
    ),
    "professional": "Maintain a professional but approachable tone.",
}

_VOCABULARY_GUIDANCE = {
    "simple": "Use clear, simple language that's accessible to developers of all levels.",
    "advanced": "Use sophisticated technical vocabulary and assume familiarity with advanced concepts.",
    "intermediate": "Use intermediate-level technical vocabulary with explanations for complex concepts.",
}

_STRUCTURE_GUIDANCE = {
    "tutorial": "Structure the content as a step-by-step guide with clear progression.",
    "structured": "Use clear headings, bullet points, and well-organized sections.",
    "narrative": "Write in a narrative flow that tells the story of the changes.",
}

_CODE_GUIDANCE = {
    "minimal": "Include concise code snippets that focus on key changes.",
    "annotated": "Provide detailed code examples with comprehensive comments and explanations.",
    "detailed": "Include relevant code examples with appropriate context.",
}


def style_guidance(style: WritingStyle) -> str:
    """Render a WritingStyle as prompt instructions, one sentence per signal."""
    parts = [_TONE_GUIDANCE.get(style.tone, _TONE_GUIDANCE["professional"])]

    if style.avg_sentence_length < 15:
        parts.append("Keep sentences concise and punchy.")
    elif style.avg_sentence_length > 25:
        parts.append("Use more detailed, comprehensive sentences with thorough explanations.")

    parts.append(_VOCABULARY_GUIDANCE.get(style.vocabulary_level, _VOCABULARY_GUIDANCE["intermediate"]))
    parts.append(_STRUCTURE_GUIDANCE.get(style.structure_preference, _STRUCTURE_GUIDANCE["narrative"]))
    parts.append(_CODE_GUIDANCE.get(style.code_example_style, _CODE_GUIDANCE["detailed"]))
    return " ".join(parts)

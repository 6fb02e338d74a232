"""Suggest external references for a generated post and render them as markdown."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass, field

from pull2press_core.errors import InvalidInputError
from pull2press_core.providers.base import BaseGenerator

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINKS = 5

_TOPICS_SYSTEM = (
    "You are a technical content analyst helping identify topics that need supporting documentation and references."
)
_LINKS_SYSTEM = (
    "You are a technical reference curator. Provide real, accurate URLs to well-known technical resources. "
    "Never make up URLs - use actual documentation sites and resources that developers commonly reference."
)

_RELEVANCE_SECTIONS = (
    ("high", "Essential Reading"),
    ("medium", "Additional Resources"),
    ("low", "Further Reading"),
)


@dataclass
class LinkSuggestion:
    title: str
    url: str
    description: str = ""
    relevance: str = "medium"  # high | medium | low
    type: str = "reference"  # documentation | tutorial | reference | article | tool

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class LinkFinderResult:
    links: list[LinkSuggestion] = field(default_factory=list)
    topics: str = ""


FALLBACK_LINKS = [
    LinkSuggestion(
        title="MDN Web Docs",
        url="https://developer.mozilla.org",
        description="Comprehensive documentation for web technologies",
        relevance="high",
        type="documentation",
    ),
    LinkSuggestion(
        title="GitHub Documentation",
        url="https://docs.github.com",
        description="Official GitHub documentation and guides",
        relevance="medium",
        type="documentation",
    ),
]


def find_helpful_links(
    content: str,
    generator: BaseGenerator,
    *,
    topic: str | None = None,
    max_links: int = DEFAULT_MAX_LINKS,
) -> LinkFinderResult:
    """Ask the model for the post's key topics, then for links covering them.

    Two generation calls: topic extraction (temperature 0.3) and link
    suggestion (temperature 0.2). Generator errors propagate; an unparseable
    link answer falls back to FALLBACK_LINKS.
    """
    if not content or not content.strip():
        raise InvalidInputError("Content is required")

    topics = generator.generate(_TOPICS_SYSTEM, _topics_prompt(content, topic), temperature=0.3)
    raw = generator.generate(_LINKS_SYSTEM, _links_prompt(topics, max_links), temperature=0.2)

    links = parse_links(raw)
    if links is None:
        logger.warning("Could not parse link suggestions; using fallback links: %s", raw[:200])
        links = list(FALLBACK_LINKS)

    valid = [link for link in links if link.url.startswith("http")]
    return LinkFinderResult(links=valid[:max_links], topics=topics)


def parse_links(raw: str) -> list[LinkSuggestion] | None:
    """Parse the model's link answer. Returns None when nothing usable is found.

    Accepts a bare JSON array, an object with a ``links`` array, and either
    of those wrapped in a markdown code fence.
    """
    cleaned = re.sub(r"^```(?:json)?\s*", "", raw.strip())
    cleaned = re.sub(r"\s*```$", "", cleaned.strip())
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        match = re.search(r"\[[\s\S]*\]", cleaned)
        if not match:
            return None
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError:
            return None

    if isinstance(parsed, dict):
        parsed = parsed.get("links")
    if not isinstance(parsed, list):
        return None

    links = []
    for item in parsed:
        if not isinstance(item, dict) or not item.get("url") or not item.get("title"):
            continue
        links.append(
            LinkSuggestion(
                title=str(item["title"]),
                url=str(item["url"]),
                description=str(item.get("description", "")),
                relevance=item.get("relevance") if item.get("relevance") in ("high", "medium", "low") else "medium",
                type=str(item.get("type", "reference")),
            )
        )
    return links


def format_links_as_markdown(links: list[LinkSuggestion]) -> str:
    if not links:
        return ""

    lines = ["", "", "## Helpful Resources", ""]
    for relevance, heading in _RELEVANCE_SECTIONS:
        group = [link for link in links if link.relevance == relevance]
        if not group:
            continue
        lines.append(f"### {heading}")
        lines.append("")
        lines.extend(
            f"- [{link.title}]({link.url}) - {link.description}" if link.description else f"- [{link.title}]({link.url})"
            for link in group
        )
        lines.append("")
    return "\n".join(lines) + "\n"


def insert_links_into_content(content: str, links: list[LinkSuggestion]) -> str:
    """Append a resources section to the post. Links are not woven into the prose."""
    return content + format_links_as_markdown(links)


def _topics_prompt(content: str, topic: str | None) -> str:
    focus = f"\n\nSpecific topic to focus on: {topic}" if topic else ""
    return f"""Analyze this technical blog post and identify the main technologies, concepts, and topics that would benefit from helpful links and references. Focus on:
1. Programming languages and frameworks mentioned
2. Technical concepts that readers might want to learn more about
3. Tools and libraries referenced
4. Best practices or patterns discussed

Content: {content}{focus}

Provide a list of 3-5 key topics that would most benefit from external references."""  # noqa: E501


def _links_prompt(topics: str, max_links: int) -> str:
    return f"""Based on these technical topics from a blog post:
{topics}

Generate {max_links} helpful link suggestions that would enhance the reader's understanding. For each link, provide:
1. A descriptive title
2. The actual URL (use real, well-known documentation sites and resources)
3. A brief description of what the reader will find
4. Relevance level (high/medium/low)
5. Type (documentation/tutorial/reference/article/tool)

Return **only** a JSON array with this structure:
[
  {{
    "title": "Example Title",
    "url": "https://example.com/path",
    "description": "What the reader will learn",
    "relevance": "high",
    "type": "documentation"
  }}
]"""

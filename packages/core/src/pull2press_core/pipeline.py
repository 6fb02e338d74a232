"""Core PR → blog post orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator

from pull2press_core.gh.pull_request import DEFAULT_MAX_COMMITS, DEFAULT_MAX_FILES, fetch_pr_data
from pull2press_core.models import (
    FetchProgress,
    ProgressCallback,
    PullRequestData,
    RegenerationOptions,
    UserPreferences,
)
from pull2press_core.prompts import build_system_prompt, build_user_prompt, get_temperature
from pull2press_core.providers.anthropic import AnthropicGenerator
from pull2press_core.providers.base import BaseGenerator
from pull2press_core.providers.openai import OpenAIGenerator
from pull2press_core.providers.proxy import ProxyGenerator

logger = logging.getLogger(__name__)


@dataclass
class PreparedPost:
    """Everything needed for one generation request, before the model is called."""

    pr_url: str
    pr_data: PullRequestData
    system_prompt: str
    user_prompt: str
    temperature: float


@dataclass
class BlogPost:
    """Result returned by generate_post; carries enough data for the CLI to persist it.

    Decoupled from pull2press_store so pull2press_core has no dependency on the
    store layer. The CLI converts this to a CachedPost before persisting.
    """

    pr_url: str
    title: str
    content: str
    temperature: float
    provider: str
    generated_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


def get_generator(config: dict) -> BaseGenerator:
    """Resolve the generation strategy once, from configuration.

    Callers hold on to the returned generator for the whole session instead of
    re-deciding per request which backend to call.
    """
    provider = config.get("provider", "openai")
    model = config.get("model")
    if provider == "openai":
        return OpenAIGenerator(api_key=config.get("openai_api_key"), model=model)
    if provider == "anthropic":
        return AnthropicGenerator(api_key=config.get("anthropic_api_key"), model=model)
    if provider == "proxy":
        return ProxyGenerator(base_url=config.get("proxy_url"), api_key=config.get("proxy_key"))
    raise ValueError(f"Unknown provider: {provider!r}. Choose 'openai', 'anthropic' or 'proxy'.")


def prepare_post(
    pr_url: str,
    github,
    *,
    preferences: UserPreferences | None = None,
    options: RegenerationOptions | None = None,
    config: dict | None = None,
    on_progress: ProgressCallback | None = None,
) -> PreparedPost:
    """Fetch the PR and compose prompts and temperature for it."""
    config = config or {}
    # Resolve the temperature first: an invalid override should fail before
    # we spend GitHub quota on the fetch.
    temperature = get_temperature(options)
    pr_data = fetch_pr_data(
        pr_url,
        github,
        max_commits=config.get("max_commits", DEFAULT_MAX_COMMITS),
        max_files=config.get("max_files", DEFAULT_MAX_FILES),
        parallel=config.get("parallel_fetch", True),
        include_discussion=config.get("include_discussion", False),
        on_progress=on_progress,
    )
    return PreparedPost(
        pr_url=pr_url,
        pr_data=pr_data,
        system_prompt=build_system_prompt(preferences, options),
        user_prompt=build_user_prompt(pr_data, options),
        temperature=temperature,
    )


def generate_post(
    pr_url: str,
    generator: BaseGenerator,
    github,
    *,
    preferences: UserPreferences | None = None,
    options: RegenerationOptions | None = None,
    config: dict | None = None,
    on_progress: ProgressCallback | None = None,
) -> BlogPost:
    """Run fetch → compose → generate and return the generated post.

    Nothing is persisted here. Errors from the fetch (InvalidUrlError,
    RateLimitError, UpstreamError) and from the generator propagate to the
    caller unchanged.
    """
    prepared = prepare_post(
        pr_url, github, preferences=preferences, options=options, config=config, on_progress=on_progress
    )
    content = generator.generate(prepared.system_prompt, prepared.user_prompt, prepared.temperature)
    if on_progress is not None:
        on_progress(FetchProgress(stage="complete", progress=100, message="Blog post generated."))
    logger.info("Generated %d chars for %s with %s", len(content), pr_url, generator.NAME)
    return BlogPost(
        pr_url=pr_url,
        title=prepared.pr_data.title,
        content=content,
        temperature=prepared.temperature,
        provider=generator.NAME,
    )


def stream_post(
    pr_url: str,
    generator: BaseGenerator,
    github,
    *,
    preferences: UserPreferences | None = None,
    options: RegenerationOptions | None = None,
    config: dict | None = None,
    on_progress: ProgressCallback | None = None,
) -> tuple[PreparedPost, Iterator[str]]:
    """Like generate_post, but return the prepared post and an iterator of text deltas.

    The fetch runs before this returns; the model is only called once the
    iterator is consumed. The ``complete`` stage is reported after the last
    delta.
    """
    prepared = prepare_post(
        pr_url, github, preferences=preferences, options=options, config=config, on_progress=on_progress
    )
    chunks = generator.generate_stream(prepared.system_prompt, prepared.user_prompt, prepared.temperature)
    return prepared, _report_complete(chunks, on_progress)


def _report_complete(chunks: Iterator[str], on_progress: ProgressCallback | None) -> Iterator[str]:
    yield from chunks
    if on_progress is not None:
        on_progress(FetchProgress(stage="complete", progress=100, message="Blog post generated."))

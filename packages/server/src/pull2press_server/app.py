"""Generation proxy: keeps the model credential on the server.

The browser (or ProxyGenerator) composes prompts itself and posts them here;
this service only forwards them to the configured provider and relays the
answer, in full or as a text/event-stream body of raw text deltas.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

from pull2press_core.errors import ConfigurationError, InvalidInputError, RateLimitError, UpstreamError
from pull2press_core.links import find_helpful_links
from pull2press_core.pipeline import get_generator
from pull2press_core.prompts import DEFAULT_TEMPERATURE
from pull2press_core.providers.base import BaseGenerator
from pull2press_server.models import ErrorResponse, GenerateRequest, GenerateResponse, LinksRequest, LinksResponse

logger = logging.getLogger(__name__)


def create_app(config: Optional[dict] = None, generator: Optional[BaseGenerator] = None) -> FastAPI:
    """Build the app with its generator resolved once, up front.

    A missing credential does not stop the app from starting; every request
    answers 500 with the configuration message instead, so the problem is
    visible to the caller rather than buried in server logs.
    """
    config_error: Optional[str] = None
    if generator is None:
        if (config or {}).get("provider") == "proxy":
            config_error = "The proxy server cannot use provider 'proxy'. Configure 'openai' or 'anthropic'."
        else:
            try:
                generator = get_generator(config or {})
            except ConfigurationError as e:
                config_error = str(e)
                logger.warning("Generation provider not configured: %s", e)

    app = FastAPI(
        title="pull2press generation proxy",
        description="Forwards composed blog-post prompts to a language model",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    def _error(status: int, message: str, details: Optional[str] = None) -> JSONResponse:
        body = ErrorResponse(error=message, details=details).model_dump(exclude_none=True)
        return JSONResponse(status_code=status, content=body)

    def _upstream(e: UpstreamError, message: str) -> JSONResponse:
        if isinstance(e, RateLimitError):
            return _error(429, "Generation API rate limit exceeded", str(e))
        if e.status == 401:
            return _error(401, "Invalid generation API key", str(e))
        return _error(502, message, str(e))

    def _rejected(request: GenerateRequest) -> Optional[JSONResponse]:
        if not request.systemPrompt or not request.userPrompt:
            return _error(400, "Both systemPrompt and userPrompt are required")
        if request.temperature is not None and not 0.0 <= request.temperature <= 1.0:
            return _error(400, "temperature must be between 0 and 1")
        if config_error is not None:
            return _error(500, config_error)
        return None

    @app.get("/")
    def root():
        return {
            "service": "pull2press",
            "status": "running" if config_error is None else "misconfigured",
            "provider": generator.NAME if generator is not None else None,
        }

    @app.post("/generate-content", response_model=GenerateResponse, responses={400: {"model": ErrorResponse}})
    def generate_content(request: GenerateRequest):
        rejected = _rejected(request)
        if rejected is not None:
            return rejected

        temperature = request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE
        try:
            content = generator.generate(request.systemPrompt, request.userPrompt, temperature)
        except InvalidInputError as e:
            return _error(400, str(e))
        except UpstreamError as e:
            logger.error("Generation failed: %s", e)
            return _upstream(e, "Failed to generate content")
        return GenerateResponse(content=content)

    @app.post("/generate-content/stream")
    def generate_content_stream(request: GenerateRequest):
        rejected = _rejected(request)
        if rejected is not None:
            return rejected

        temperature = request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE
        try:
            chunks = generator.generate_stream(request.systemPrompt, request.userPrompt, temperature)
            # Pull the first delta before committing to a 200: upstream status
            # errors surface on the first read, and must still map to a status code.
            first = next(chunks, None)
        except InvalidInputError as e:
            return _error(400, str(e))
        except UpstreamError as e:
            logger.error("Streaming generation failed: %s", e)
            return _upstream(e, "Failed to generate content")

        return StreamingResponse(
            _raw_deltas(first, chunks),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache"},
        )

    @app.post("/find-helpful-links", response_model=LinksResponse, responses={400: {"model": ErrorResponse}})
    def find_links(request: LinksRequest):
        if not request.content or not request.content.strip():
            return _error(400, "Content is required")
        if config_error is not None:
            return _error(500, config_error)

        try:
            result = find_helpful_links(request.content, generator, topic=request.topic, max_links=request.maxLinks)
        except UpstreamError as e:
            logger.error("Link finding failed: %s", e)
            return _upstream(e, "Failed to find helpful links")
        return {"links": [link.to_dict() for link in result.links], "topics": result.topics}

    return app


def _raw_deltas(first: Optional[str], rest: Iterator[str]) -> Iterator[str]:
    """Relay text deltas verbatim. A failure after the first delta ends the body early."""
    if first:
        yield first
    try:
        for delta in rest:
            yield delta
    except UpstreamError as e:
        # Headers are already sent, so the only signal left is the truncated body.
        logger.error("Stream interrupted: %s", e)

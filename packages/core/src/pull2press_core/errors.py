"""Typed failures raised by the fetch and generation steps.

Every error here is per-request: the CLI and HTTP layers map them to a
user-visible message or status code and carry on. Persistence failures are
raised as pull2press_store.base.PersistenceError so the store package has no
dependency on this one.
"""

from __future__ import annotations


class Pull2PressError(Exception):
    """Base class for all pipeline errors."""


class InvalidInputError(Pull2PressError):
    """Caller supplied something unusable: an empty prompt, a bad option."""


class InvalidUrlError(InvalidInputError):
    """The PR URL does not look like github.com/<owner>/<repo>/pull/<number>."""


class ConfigurationError(Pull2PressError):
    """A credential or endpoint required by the selected provider is missing."""


class UpstreamError(Pull2PressError):
    """GitHub or the generation API answered with a non-success status."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class RateLimitError(UpstreamError):
    """The upstream quota is exhausted for this caller."""

    def __init__(self, message: str, status: int | None = 429):
        super().__init__(message, status=status)

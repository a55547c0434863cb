"""Exception taxonomy shared by every layer.

Transport and malformed-output failures are absorbed by the component that
hits them. Configuration errors propagate; they mean the system cannot work.
"""

from __future__ import annotations


class AgenticRagError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TransportFailureError(AgenticRagError):
    """A network call to an external service failed or timed out."""


class MalformedOutputError(AgenticRagError):
    """A model response did not parse into the expected structure."""


class ConfigurationError(AgenticRagError):
    """Missing credentials, dimension mismatch, bad metadata, unknown backend."""


class InvalidQuestionError(AgenticRagError, ValueError):
    """The question is empty or whitespace-only."""

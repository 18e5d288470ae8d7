"""Client interfaces for interacting with different LLM backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Protocol, runtime_checkable

from .extraction import OutputExtractor
from .models import ExtractionResult, LLMRequestContext


class LLMClientError(RuntimeError):
    """Raised when an LLM provider fails to fulfil a request."""


@runtime_checkable
class TextResponseParser(Protocol):
    """Protocol for turning raw LLM output into display text."""

    def parse(self, raw_output: str) -> ExtractionResult:
        """Convert the raw completion into the payload and how it was found."""


class LLMClientBase(ABC):
    """Abstract base class ensuring consistent behaviour across providers."""

    def __init__(self, *, parser: TextResponseParser) -> None:
        self._parser = parser

    @abstractmethod
    def complete(
        self,
        *,
        prompt: str,
        request_context: LLMRequestContext,
        system_prompt: Optional[str] = None,
    ) -> str:
        """Perform a completion call and return the raw model text."""

    def generate_result(
        self,
        *,
        prompt: str,
        request_context: LLMRequestContext,
        system_prompt: Optional[str] = None,
    ) -> ExtractionResult:
        """Execute the completion and run it through the configured parser."""

        raw_output = self.complete(
            prompt=prompt,
            request_context=request_context,
            system_prompt=system_prompt,
        )

        try:
            return self._parser.parse(raw_output)
        except ValueError as exc:
            raise LLMClientError(f"Failed to parse LLM output: {exc}") from exc

    def generate_text(
        self,
        *,
        prompt: str,
        request_context: LLMRequestContext,
        system_prompt: Optional[str] = None,
    ) -> str:
        """Execute the completion and return only the payload text."""

        return self.generate_result(
            prompt=prompt,
            request_context=request_context,
            system_prompt=system_prompt,
        ).text


def default_parser(extractor: Optional[OutputExtractor] = None) -> TextResponseParser:
    """Return a parser that recovers the ``output`` field of a JSON reply.

    ``extractor`` replaces the default strategy chain when given.
    """

    class _Parser:
        def __init__(self, extractor: OutputExtractor) -> None:
            self._extractor = extractor

        def parse(self, raw_output: str) -> ExtractionResult:  # noqa: D401
            return self._extractor.run(raw_output)

    return _Parser(extractor or OutputExtractor())


__all__ = [
    "LLMClientBase",
    "LLMClientError",
    "TextResponseParser",
    "default_parser",
]

"""Recover the ``output`` payload from loosely structured LLM responses.

Language models asked to reply with ``{"output": "..."}`` do not always
comply: the JSON may be fenced, surrounded by commentary, truncated, or
missing entirely. :class:`OutputExtractor` runs a fixed list of strategies,
strictest first, and stops at the first one that yields a candidate. The last
strategy returns the whole response, so extraction never fails; the candidate
is then passed through :func:`textgen.sanitizer.sanitize`.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from .models import ExtractionAttempt, ExtractionResult
from .sanitizer import sanitize
from .utils import strip_json_code_fence

logger = logging.getLogger(__name__)

OUTPUT_FIELD_PATTERN = re.compile(r"\"output\"\s*:\s*\"([^\"]*)\"")


class ExtractionError(ValueError):
    """Base class for failures that advance the strategy chain."""


class MalformedJson(ExtractionError):
    """The whole response is not valid JSON."""


class MissingOutputField(ExtractionError):
    """Parsed JSON is not an object with a string ``output`` field."""


class NoEmbeddedObject(ExtractionError):
    """No ``{...}`` span exists in the response."""


class EmbeddedParseFailure(ExtractionError):
    """The ``{...}`` span is not valid JSON."""


class NoFieldMatch(ExtractionError):
    """No quoted ``"output": "..."`` pair was found."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _loads_strict(text: str) -> Any:
    # json.loads accepts NaN/Infinity; generated JSON should not.
    return json.loads(text, parse_constant=_reject_constant)


def _read_output_field(payload: Any) -> str:
    if isinstance(payload, dict) and isinstance(payload.get("output"), str):
        return payload["output"]
    raise MissingOutputField("JSON payload has no string 'output' field")


class ExtractionStrategy(ABC):
    """A single way of locating the payload inside a response."""

    name: str = "strategy"

    def attempt(self, text: str, *, position: int) -> ExtractionAttempt:
        """Run the strategy and report the outcome instead of raising."""

        try:
            candidate = self.extract(text)
        except ExtractionError as exc:
            return ExtractionAttempt(
                strategy=position,
                name=self.name,
                succeeded=False,
                error=type(exc).__name__,
            )
        return ExtractionAttempt(
            strategy=position,
            name=self.name,
            succeeded=True,
            candidate=candidate,
        )

    @abstractmethod
    def extract(self, text: str) -> str:
        """Return the candidate payload or raise :class:`ExtractionError`."""


class StrictJsonStrategy(ExtractionStrategy):
    """Parse the whole response as a JSON object."""

    name = "strict_json"

    def extract(self, text: str) -> str:
        try:
            payload = _loads_strict(text)
        except (ValueError, RecursionError) as exc:
            raise MalformedJson(str(exc)) from exc
        return _read_output_field(payload)


class EmbeddedObjectStrategy(ExtractionStrategy):
    """Parse the span between the first ``{`` and the last ``}``."""

    name = "embedded_object"

    def extract(self, text: str) -> str:
        # Greedy: first "{" to last "}". Concatenated objects are mis-extracted.
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end < start:
            raise NoEmbeddedObject("No '{...}' span in response")
        try:
            payload = _loads_strict(text[start : end + 1])
        except (ValueError, RecursionError) as exc:
            raise EmbeddedParseFailure(str(exc)) from exc
        return _read_output_field(payload)


class OutputFieldPatternStrategy(ExtractionStrategy):
    """Capture the quoted value of an ``"output"`` key without parsing JSON.

    The captured text is returned verbatim; escape sequences are left for the
    sanitizer.
    """

    name = "output_pattern"

    def extract(self, text: str) -> str:
        match = OUTPUT_FIELD_PATTERN.search(text)
        if match is None or not match.group(1):
            raise NoFieldMatch("No quoted 'output' value in response")
        return match.group(1)


class RawTextStrategy(ExtractionStrategy):
    """Use the whole response as the payload."""

    name = "raw_text"

    def extract(self, text: str) -> str:
        return text


DEFAULT_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    StrictJsonStrategy(),
    EmbeddedObjectStrategy(),
    OutputFieldPatternStrategy(),
    RawTextStrategy(),
)


class OutputExtractor:
    """Run extraction strategies in priority order and sanitise the winner."""

    def __init__(self, strategies: Optional[Sequence[ExtractionStrategy]] = None) -> None:
        self._strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

    @property
    def strategies(self) -> tuple[ExtractionStrategy, ...]:
        return self._strategies

    def run(self, raw: str) -> ExtractionResult:
        """Return the cleaned payload of *raw* along with every attempt made."""

        text = strip_json_code_fence(raw)
        attempts = []

        for position, strategy in enumerate(self._strategies, start=1):
            attempt = strategy.attempt(text, position=position)
            attempts.append(attempt)
            if attempt.succeeded:
                return ExtractionResult(
                    text=sanitize(attempt.candidate or ""),
                    strategy=strategy.name,
                    raw_output=raw,
                    attempts=attempts,
                )
            logger.debug("Extraction strategy %s failed: %s", strategy.name, attempt.error)

        # Only reachable with a custom chain lacking a raw fallback.
        return ExtractionResult(
            text=sanitize(text),
            strategy=RawTextStrategy.name,
            raw_output=raw,
            attempts=attempts,
        )

    def extract(self, raw: str) -> str:
        return self.run(raw).text


_DEFAULT_EXTRACTOR = OutputExtractor()


def extract_output(raw: str) -> ExtractionResult:
    """Run the default strategy chain and report how the payload was found."""

    return _DEFAULT_EXTRACTOR.run(raw)


def extract(raw: str) -> str:
    """Return the cleaned ``output`` payload of an LLM response.

    >>> extract('```json\\n{"output": "Hello"}\\n```')
    'Hello'
    >>> extract("plain text with no JSON at all")
    'plain text with no JSON at all'
    """

    return _DEFAULT_EXTRACTOR.extract(raw)


__all__ = [
    "DEFAULT_STRATEGIES",
    "EmbeddedObjectStrategy",
    "EmbeddedParseFailure",
    "ExtractionError",
    "ExtractionStrategy",
    "MalformedJson",
    "MissingOutputField",
    "NoEmbeddedObject",
    "NoFieldMatch",
    "OutputExtractor",
    "OutputFieldPatternStrategy",
    "RawTextStrategy",
    "StrictJsonStrategy",
    "extract",
    "extract_output",
]

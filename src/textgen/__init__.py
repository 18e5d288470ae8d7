"""Public API for extracting display text from LLM responses."""

from __future__ import annotations

from typing import Optional

from .clients import LLMClientBase, LLMClientError, TextResponseParser, default_parser
from .extraction import (
    DEFAULT_STRATEGIES,
    EmbeddedObjectStrategy,
    ExtractionError,
    ExtractionStrategy,
    OutputExtractor,
    OutputFieldPatternStrategy,
    RawTextStrategy,
    StrictJsonStrategy,
    extract,
    extract_output,
)
from .models import ExtractionAttempt, ExtractionResult, GeneratedText, LLMRequestContext
from .responses import build_backstory_prompts, build_humanizer_prompts
from .sanitizer import sanitize
from .utils import strip_json_code_fence
from .workflow import (
    TextGenerationOrchestrator,
    create_gemini_components,
    create_openai_components,
)


def create_client(
    provider: str,
    *,
    parser: Optional[TextResponseParser] = None,
    **kwargs,
) -> LLMClientBase:
    """Factory for provider-specific LLM clients.

    Parameters
    ----------
    provider:
        Identifier for the LLM backend (``"openai"``, ``"gemini"``, ``"lmstudio"``).
    parser:
        Optional response parser. Defaults to :func:`default_parser`.
    **kwargs:
        Additional keyword arguments forwarded to the provider client constructor.
    """

    parser = parser or default_parser()
    provider_key = provider.lower().strip()

    if provider_key == "openai":
        from .providers.openai_provider import OpenAIClient

        return OpenAIClient(parser=parser, **kwargs)

    if provider_key in {"gemini", "google"}:
        from .providers.gemini_provider import GeminiClient

        return GeminiClient(parser=parser, **kwargs)

    if provider_key == "lmstudio":
        from .providers.lmstudio import LMStudioClient

        return LMStudioClient(parser=parser, **kwargs)

    raise ValueError(f"Unsupported provider '{provider}'.")


__all__ = [
    "DEFAULT_STRATEGIES",
    "EmbeddedObjectStrategy",
    "ExtractionAttempt",
    "ExtractionError",
    "ExtractionResult",
    "ExtractionStrategy",
    "GeneratedText",
    "LLMClientBase",
    "LLMClientError",
    "LLMRequestContext",
    "OutputExtractor",
    "OutputFieldPatternStrategy",
    "RawTextStrategy",
    "StrictJsonStrategy",
    "TextGenerationOrchestrator",
    "TextResponseParser",
    "build_backstory_prompts",
    "build_humanizer_prompts",
    "create_client",
    "create_gemini_components",
    "create_openai_components",
    "default_parser",
    "extract",
    "extract_output",
    "sanitize",
    "strip_json_code_fence",
]

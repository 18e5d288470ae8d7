"""Wiring between prompt builders, LLM clients and the output extractor."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Tuple

from .clients import LLMClientBase, default_parser
from .models import GeneratedText, LLMRequestContext
from .providers.gemini_provider import GeminiClient
from .providers.openai_provider import OpenAIClient
from .responses import build_backstory_prompts, build_humanizer_prompts

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"
DEFAULT_GEMINI_MODEL = "gemini-pro"
DEFAULT_TEMPERATURE = 0.7


def create_gemini_components(
    *,
    api_key: Optional[str] = None,
    model_name: Optional[str] = None,
    temperature: float = DEFAULT_TEMPERATURE,
    generation_config_overrides: Optional[Dict[str, Any]] = None,
    safety_settings: Optional[Any] = None,
    parser=None,
) -> Tuple[GeminiClient, LLMRequestContext]:
    """Return a Gemini client and a request context for text generation.

    Parameters
    ----------
    api_key:
        Gemini API key. Falls back to the ``GEMINI_API_KEY`` environment
        variable when omitted.
    model_name:
        Gemini model identifier. Falls back to ``GEMINI_MODEL`` and then to
        :data:`DEFAULT_GEMINI_MODEL`.
    temperature:
        Controls variance in the generated prose.
    generation_config_overrides:
        Optional dict merged into the default generation config.
    safety_settings:
        Optional Gemini safety settings payload (list or dict).
    parser:
        Optional response parser for the client. Defaults to :func:`default_parser`.
    """

    resolved_key = api_key or os.getenv("GEMINI_API_KEY")
    if not resolved_key:
        raise ValueError("Gemini API key must be provided via api_key or GEMINI_API_KEY env var")

    generation_config: Dict[str, Any] = {"temperature": temperature}
    if generation_config_overrides:
        generation_config.update(generation_config_overrides)

    client = GeminiClient(
        parser=parser or default_parser(),
        api_key=resolved_key,
        default_generation_config=generation_config,
        default_safety_settings=safety_settings,
    )
    request_context = LLMRequestContext(
        model_name=model_name or os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
    )
    return client, request_context


def create_openai_components(
    *,
    api_key: Optional[str] = None,
    model_name: Optional[str] = None,
    temperature: float = DEFAULT_TEMPERATURE,
    parser=None,
) -> Tuple[OpenAIClient, LLMRequestContext]:
    """Return an OpenAI client and a request context for text generation.

    ``api_key`` falls back to ``OPENAI_API_KEY`` and ``model_name`` to
    ``OPENAI_MODEL``, then :data:`DEFAULT_OPENAI_MODEL`. ``parser`` defaults to
    :func:`default_parser`.
    """

    resolved_key = api_key or os.getenv("OPENAI_API_KEY")
    if not resolved_key:
        raise ValueError("OpenAI API key must be provided via api_key or OPENAI_API_KEY env var")

    client = OpenAIClient(parser=parser or default_parser(), api_key=resolved_key)
    request_context = LLMRequestContext(
        model_name=model_name or os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
        extra_options={"temperature": temperature},
    )
    return client, request_context


class TextGenerationOrchestrator:
    """Coordinates prompt construction and provider invocation.

    Extraction happens in the client's parser, so a parser configured through
    :func:`create_openai_components`, :func:`create_gemini_components` or
    :func:`textgen.create_client` decides the result.
    """

    def __init__(self, *, client: LLMClientBase, request_context: LLMRequestContext) -> None:
        self._client = client
        self._request_context = request_context

    def generate_backstory(self, prompt: str) -> GeneratedText:
        """Generate a character backstory for the user's *prompt*."""

        system_prompt, user_prompt = build_backstory_prompts(prompt=prompt)
        return self._generate(user_prompt=user_prompt, system_prompt=system_prompt)

    def humanize_text(self, text: str) -> GeneratedText:
        """Rewrite *text* so that it reads more naturally."""

        system_prompt, user_prompt = build_humanizer_prompts(text=text)
        return self._generate(user_prompt=user_prompt, system_prompt=system_prompt)

    def _generate(self, *, user_prompt: str, system_prompt: str) -> GeneratedText:
        result = self._client.generate_result(
            prompt=user_prompt,
            request_context=self._request_context,
            system_prompt=system_prompt,
        )

        if not result.is_strict:
            logger.warning(
                "Model %s returned non-JSON output; payload recovered via %s strategy",
                self._request_context.model_name,
                result.strategy,
            )

        return GeneratedText(
            text=result.text,
            raw_output=result.raw_output,
            strategy=result.strategy,
            model_name=self._request_context.model_name,
        )


__all__ = [
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_OPENAI_MODEL",
    "TextGenerationOrchestrator",
    "create_gemini_components",
    "create_openai_components",
]

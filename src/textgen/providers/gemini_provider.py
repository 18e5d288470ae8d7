"""Google Gemini provider implementation."""

from __future__ import annotations

import copy
from typing import Any, Dict, Optional

import google.generativeai as genai

from ..clients import LLMClientBase, LLMClientError
from ..models import LLMRequestContext


class GeminiClient(LLMClientBase):
    """Client targeting Google Gemini via the generative AI Python SDK."""

    def __init__(
        self,
        *,
        parser,
        api_key: str,
        default_generation_config: Optional[Dict[str, Any]] = None,
        default_safety_settings: Optional[Any] = None,
    ) -> None:
        if not api_key:
            raise ValueError("GeminiClient requires a valid api_key")

        super().__init__(parser=parser)
        genai.configure(api_key=api_key)

        self._default_generation_config = default_generation_config or {}
        self._default_safety_settings = default_safety_settings

    def _build_request_kwargs(self, request_context: LLMRequestContext) -> Dict[str, Any]:
        extra_options = copy.deepcopy(request_context.extra_options)

        generation_config = copy.deepcopy(self._default_generation_config)
        generation_config.update(extra_options.pop("generation_config", {}))
        if request_context.response_format:
            generation_config.setdefault("response_mime_type", "application/json")
            generation_config.setdefault("response_schema", request_context.response_format)

        safety_settings = extra_options.pop("safety_settings", self._default_safety_settings)

        request_kwargs: Dict[str, Any] = {}
        if generation_config:
            request_kwargs["generation_config"] = generation_config
        if safety_settings is not None:
            request_kwargs["safety_settings"] = safety_settings
        request_kwargs.update(extra_options)
        return request_kwargs

    def complete(
        self,
        *,
        prompt: str,
        request_context: LLMRequestContext,
        system_prompt: Optional[str] = None,
    ) -> str:
        request_kwargs = self._build_request_kwargs(request_context)

        try:
            model = genai.GenerativeModel(
                model_name=request_context.model_name,
                system_instruction=system_prompt,
            )
            response = model.generate_content(prompt, **request_kwargs)
        except Exception as exc:  # pragma: no cover - network dependent
            raise LLMClientError(f"Gemini request failed: {exc}") from exc

        return _response_text(response)


def _response_text(response: Any) -> str:
    """Return the text of a Gemini response, joining candidate parts if needed."""

    if response is None:
        raise LLMClientError("Empty response from Gemini")

    try:
        text_payload = getattr(response, "text", None)
    except ValueError:
        # ``.text`` raises when the candidate has no simple text part.
        text_payload = None
    if text_payload:
        return text_payload

    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        fragments = [getattr(part, "text", "") for part in parts if getattr(part, "text", "")]
        if fragments:
            return "".join(fragments)

    raise LLMClientError(f"Gemini response did not contain text content: {response}")


__all__ = ["GeminiClient"]

"""LM Studio provider implementation."""

from __future__ import annotations

import json
from typing import Optional

import requests

from ..clients import LLMClientBase, LLMClientError
from ..models import LLMRequestContext
from .openai_provider import build_chat_messages

DEFAULT_LMSTUDIO_BASE_URL = "http://127.0.0.1:1234/v1"


class LMStudioClient(LLMClientBase):
    """Client targeting a local, OpenAI-compatible LM Studio endpoint."""

    def __init__(
        self,
        *,
        parser,
        base_url: str = DEFAULT_LMSTUDIO_BASE_URL,
        timeout: int = 60,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(parser=parser)
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def chat_completions_url(self) -> str:
        return f"{self._base_url}/chat/completions"

    def complete(
        self,
        *,
        prompt: str,
        request_context: LLMRequestContext,
        system_prompt: Optional[str] = None,
    ) -> str:
        payload = {
            "model": request_context.model_name,
            "messages": build_chat_messages(prompt, system_prompt),
            **request_context.extra_options,
        }
        if request_context.response_format:
            payload["response_format"] = request_context.response_format

        try:
            response = self._session.post(
                self.chat_completions_url,
                headers={"Content-Type": "application/json"},
                data=json.dumps(payload),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise LLMClientError(f"LM Studio request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise LLMClientError(f"LM Studio returned a non-JSON body: {exc}") from exc

        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as exc:
            raise LLMClientError(f"Unexpected LM Studio response payload: {data}") from exc


__all__ = ["DEFAULT_LMSTUDIO_BASE_URL", "LMStudioClient"]

"""Provider entry points."""

from .gemini_provider import GeminiClient
from .lmstudio import LMStudioClient
from .openai_provider import OpenAIClient

__all__ = [
    "GeminiClient",
    "LMStudioClient",
    "OpenAIClient",
]

"""Data models for the text generation module."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExtractionAttempt(BaseModel):
    """Outcome of a single extraction strategy run against a response."""

    strategy: int = Field(..., ge=1, description="Position of the strategy in the chain")
    name: str = Field(..., description="Short strategy identifier")
    succeeded: bool = Field(..., description="True if the strategy produced a candidate")
    candidate: Optional[str] = Field(
        None, description="Unsanitised payload produced by the strategy"
    )
    error: Optional[str] = Field(
        None, description="Kind of failure that made the chain move on"
    )


class ExtractionResult(BaseModel):
    """Cleaned payload together with the attempts that led to it."""

    text: str = Field(..., description="Sanitised payload returned to the caller")
    strategy: str = Field(..., description="Name of the strategy that produced the payload")
    attempts: List[ExtractionAttempt] = Field(default_factory=list)
    raw_output: str = Field("", description="Response exactly as it was received")

    @property
    def is_strict(self) -> bool:
        """True when the whole response parsed as the expected JSON object."""

        return self.strategy == "strict_json"


class LLMRequestContext(BaseModel):
    """Information passed to the LLM provider."""

    model_config = ConfigDict(protected_namespaces=())

    model_name: str = Field(..., description="Provider specific model identifier")
    extra_options: Dict[str, object] = Field(
        default_factory=dict, description="Additional provider kwargs"
    )
    response_format: Optional[Dict[str, object]] = Field(
        None, description="JSON schema for structured output format"
    )


class GeneratedText(BaseModel):
    """Text produced by a generation call, after extraction."""

    model_config = ConfigDict(protected_namespaces=())

    text: str = Field(..., description="Cleaned payload ready for display")
    raw_output: str = Field(..., description="Completion exactly as the provider returned it")
    strategy: str = Field(..., description="Extraction strategy that recovered the payload")
    model_name: str = Field(..., description="Model that generated the completion")


__all__ = [
    "ExtractionAttempt",
    "ExtractionResult",
    "GeneratedText",
    "LLMRequestContext",
]

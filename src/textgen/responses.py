"""Prompt builders for the site's text generators."""

from __future__ import annotations

import json
from textwrap import dedent
from typing import Tuple


OUTPUT_FORMAT_INSTRUCTIONS = dedent(
    """
    Respond with JSON only, exactly in this shape:
    {"output": "<your text>"}
    Do not wrap the JSON in code fences and do not add commentary before or after it.
    """
).strip()

BACKSTORY_PROMPT_TEMPLATE = dedent(
    """
    Create a compelling character backstory based on this prompt: {prompt}

    Please write a detailed, engaging backstory that incorporates all elements
    while maintaining consistency and emotional depth. The backstory should be
    well-structured, approximately 2-3 paragraphs long. Separate paragraphs
    with a newline.
    """
).strip()


def _with_output_format(instructions: str) -> str:
    return dedent(instructions).strip() + "\n\n" + OUTPUT_FORMAT_INSTRUCTIONS


def build_backstory_prompts(*, prompt: str) -> Tuple[str, str]:
    """Return system and user prompts for a character backstory."""

    system_prompt = _with_output_format(
        """
        You are a creative writer who crafts character backstories for
        role-playing games and fiction.
        """
    )

    user_prompt = BACKSTORY_PROMPT_TEMPLATE.format(prompt=prompt)

    return system_prompt, user_prompt


def build_humanizer_prompts(*, text: str) -> Tuple[str, str]:
    """Return system and user prompts that rewrite *text* to sound natural."""

    system_prompt = _with_output_format(
        """
        You are an expert at making text sound more natural and human-like.
        Rewrite the given text to make it more conversational and engaging while
        maintaining the original meaning.
        """
    )

    # JSON-quoted to delimit the input.
    user_prompt = f"Text to rewrite (JSON string): {json.dumps(text, ensure_ascii=False)}"

    return system_prompt, user_prompt


__all__ = [
    "BACKSTORY_PROMPT_TEMPLATE",
    "OUTPUT_FORMAT_INSTRUCTIONS",
    "build_backstory_prompts",
    "build_humanizer_prompts",
]

"""Example demonstrating extraction and the generation orchestrator."""

from __future__ import annotations

import logging
import sys

from textgen import (
    TextGenerationOrchestrator,
    create_openai_components,
    extract_output,
)

SAMPLE_RESPONSES = [
    '{"output": "A clean JSON reply."}',
    '```json\n{"output": "A fenced reply."}\n```',
    'Here you go:\n{"output": "A reply with chatter around it."}\nHope that helps!',
    'Truncated {"output": "but the value is complete", "notes": ',
    "No JSON at all, just prose.",
]


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    for raw in SAMPLE_RESPONSES:
        result = extract_output(raw)
        print(f"[{result.strategy}] {result.text}")

    if len(sys.argv) < 2:
        print("Pass a backstory prompt to call OpenAI (requires OPENAI_API_KEY).")
        return

    client, request_context = create_openai_components()
    orchestrator = TextGenerationOrchestrator(client=client, request_context=request_context)
    backstory = orchestrator.generate_backstory(" ".join(sys.argv[1:]))
    print(backstory.text)


if __name__ == "__main__":
    main()

"""Utility helpers for preparing raw LLM responses for parsing."""

from __future__ import annotations

import re

CODE_FENCE = "```"
JSON_CODE_FENCE = "```json"

_WHITESPACE_RUN = re.compile(r"\s*")
_PLAIN_RUN = re.compile(r"[^\s`]+")


def strip_json_code_fence(raw: str) -> str:
    """Return *raw* with markdown code fences removed.

    Some LLM providers wrap JSON payloads in markdown code fences, e.g.::

        ```json
        {"output": "..."}
        ```

    Every opening fence (with an optional ``json`` language hint and the
    whitespace that follows it) and every closing fence (with the whitespace
    that precedes it) is removed, wherever it appears. The rest of the text is
    left untouched, and text without fences is returned unchanged.

    The result equals ``re.sub(r"```json\\s*|\\s*```", "", raw)``, computed in a
    single left-to-right pass so long whitespace runs are scanned once.
    """

    if not raw or CODE_FENCE not in raw:
        return raw

    pieces = []
    pos = 0
    length = len(raw)

    while pos < length:
        if raw.startswith(JSON_CODE_FENCE, pos):
            pos = _WHITESPACE_RUN.match(raw, pos + len(JSON_CODE_FENCE)).end()
            continue

        plain = _PLAIN_RUN.match(raw, pos)
        if plain is not None:
            pieces.append(plain.group(0))
            pos = plain.end()
            continue

        # Whitespace or a backtick: a closing fence may start here.
        run_end = _WHITESPACE_RUN.match(raw, pos).end()
        if raw.startswith(CODE_FENCE, run_end):
            pos = run_end + len(CODE_FENCE)
        elif run_end > pos:
            # The same run ends every match tried inside it, so skip it whole.
            pieces.append(raw[pos:run_end])
            pos = run_end
        else:
            pieces.append(raw[pos])
            pos += 1

    return "".join(pieces)


__all__ = ["CODE_FENCE", "JSON_CODE_FENCE", "strip_json_code_fence"]

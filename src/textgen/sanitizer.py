"""Normalisation applied to every candidate string the extractor produces."""

from __future__ import annotations

import re

SURROUNDING_QUOTE_PATTERN = re.compile(r"^[\"']|[\"']\Z")
HORIZONTAL_WHITESPACE_PATTERN = re.compile(r"[^\S\r\n]+")
JSON_WRAPPER_PATTERN = re.compile(r"^\{.*?\"output\":\s*\"|\"\s*\}\Z")


def sanitize(text: str) -> str:
    """Return *text* cleaned up for display.

    The steps run in a fixed order, each on the result of the previous one:

    1. trim surrounding whitespace;
    2. drop one leading and one trailing quote character;
    3. unescape ``\\"`` into ``"``;
    4. turn literal ``\\n`` sequences into newlines;
    5. collapse runs of horizontal whitespace into a single space while
       keeping newlines;
    6. strip a leftover ``{..."output": "`` prefix and ``"}`` suffix;
    7. trim again.

    The wrapper strip in step 6 is a blind prefix/suffix match, so prose that
    legitimately contains ``{"output": "`` loses that fragment.
    """

    cleaned = text.strip()
    cleaned = SURROUNDING_QUOTE_PATTERN.sub("", cleaned)
    cleaned = cleaned.replace('\\"', '"')
    cleaned = cleaned.replace("\\n", "\n")
    cleaned = HORIZONTAL_WHITESPACE_PATTERN.sub(" ", cleaned)
    cleaned = JSON_WRAPPER_PATTERN.sub("", cleaned)
    return cleaned.strip()


__all__ = ["sanitize"]

"""Pull the reply text out of a Responses API payload.

The payload shape is not guaranteed, so extraction is an ordered list of
small functions. The first one that yields non-empty text wins; if none do,
the reply is the empty string. Extractors never raise.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

Extractor = Callable[[Any], "str | None"]


def output_text(payload: Any) -> str | None:
    """Top-level ``output_text`` convenience field."""

    if not isinstance(payload, dict):
        return None
    text = payload.get("output_text")
    return text if isinstance(text, str) else None


def first_output_content_text(payload: Any) -> str | None:
    """``output[0].content[0].text``."""

    if not isinstance(payload, dict):
        return None
    try:
        text = payload["output"][0]["content"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


DEFAULT_EXTRACTORS: tuple[Extractor, ...] = (output_text, first_output_content_text)


def extract_text(payload: Any, extractors: Sequence[Extractor] = DEFAULT_EXTRACTORS) -> str:
    for extractor in extractors:
        text = extractor(payload)
        if text:
            return text
    return ""

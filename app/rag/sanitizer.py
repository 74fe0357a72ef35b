"""
Output filter that keeps answers safe for text-to-speech playback.
"""

from __future__ import annotations

import re

# Astral-plane code points (emoji, pictographs) and lone surrogates.
_EMOJI_PATTERN = re.compile("[\U00010000-\U0010FFFF\uD800-\uDFFF]")
_SYMBOL_BLOCK_PATTERN = re.compile("[\u2600-\u26FF]")
_MARKUP_PATTERN = re.compile("[\u2022*#>_`~|$%^<\\[\\]{}@+=]")
_WHITESPACE_RUN_PATTERN = re.compile(r"\s{2,}")


def strip_symbols(text: str) -> str:
    text = _EMOJI_PATTERN.sub("", text)
    text = _SYMBOL_BLOCK_PATTERN.sub("", text)
    return _MARKUP_PATTERN.sub("", text)


def sanitize(text: str, trim: bool = True) -> str:
    """
    Remove emoji, pictographs and markdown punctuation, then collapse whitespace runs.

    ``trim=False`` keeps a single leading/trailing space, which streamed token
    deltas need to stay joinable.
    """
    cleaned = _WHITESPACE_RUN_PATTERN.sub(" ", strip_symbols(text or ""))
    return cleaned.strip() if trim else cleaned


__all__ = ["sanitize", "strip_symbols"]

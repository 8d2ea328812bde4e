"""Remove a code-fence wrapper the model sometimes puts around its markdown."""

from __future__ import annotations

import re

_LEADING_FENCE = re.compile(r"\A```[\w+-]*[ \t]*(?:\r?\n)?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"(?:\r?\n)?```[ \t]*\Z")


def strip_code_fence(text: str) -> str:
    """Return the document without a surrounding fence and outer whitespace.

    The closing fence is only removed when an opening fence was found, so a
    document that legitimately ends with a code block keeps it intact.
    """
    stripped = text.strip()
    unwrapped = _LEADING_FENCE.sub("", stripped, count=1)
    if unwrapped != stripped:
        unwrapped = _TRAILING_FENCE.sub("", unwrapped, count=1)
    return unwrapped.strip()


__all__ = ["strip_code_fence"]

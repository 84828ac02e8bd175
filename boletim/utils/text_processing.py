"""
Text processing utilities for the portal pages.

Small string helpers for the raw HTML body and for pt-BR table cells.
"""

import re
from typing import Optional

# Leading float the way a browser's parseFloat reads it; trailing junk is ignored.
_LEADING_FLOAT = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_NUMBERED_SUFFIX = re.compile(r" - ([0-9]*)")


def slice_from_last_occurrence(text: str, start_substr: str, end_substr: str) -> Optional[str]:
    """
    Cut the text from the last occurrence of start_substr up to and including
    the first end_substr that follows it.

    Args:
        text: The string to slice
        start_substr: The substring to find the last occurrence of
        end_substr: The substring closing the slice

    Returns:
        The slice, the tail of the text if end_substr never follows,
        or None if start_substr does not occur at all

    Example:
        >>> slice_from_last_occurrence("a=1; a=2; b", "a=", ";")
        "a=2;"
    """
    start_index = text.rfind(start_substr)
    if start_index == -1:
        return None

    result = text[start_index:]

    end_index = result.find(end_substr)
    if end_index != -1:
        result = result[: end_index + len(end_substr)]

    return result


def normalize_header_label(label: str) -> str:
    """
    Normalize a header cell such as ``"Turma - 3:"`` to ``"Turma"``.

    Colons are removed, then any `` - <digits>`` annotation, then whitespace is trimmed.
    """
    label = label.replace(":", "")
    label = _NUMBERED_SUFFIX.sub("", label)
    return label.strip()


def parse_decimal(text: str) -> Optional[float]:
    """
    Parse a pt-BR decimal cell (``"7,5"``) into a float.

    Only the first comma is treated as the decimal separator. Returns None
    when the cell does not start with a number (``"-"``, blank cells).
    """
    match = _LEADING_FLOAT.match(text.strip().replace(",", ".", 1))
    if match is None:
        return None
    return float(match.group(0))

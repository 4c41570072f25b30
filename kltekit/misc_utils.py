"""String helpers for delimiter splitting and whitespace trimming."""

from __future__ import annotations

import logging

_log = logging.getLogger(__name__)

# The characters C's isspace() accepts in the "C" locale.
_C_SPACE = " \t\n\v\f\r"


def split_string(raw_string: str, max_num_substrings: int, delimiter: str = " ") -> list[str]:
    """Split ``raw_string`` on ``delimiter`` into at most ``max_num_substrings`` parts.

    Text after the last kept part is dropped. The first part is always
    produced, even when ``max_num_substrings`` is smaller than one. A NUL
    character ends the string, as it would for a C string.
    """
    if raw_string is None:
        raise ValueError("raw_string must not be None")
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ValueError("delimiter must be a single character")
    _log.debug("raw string: %s", raw_string)
    text = raw_string.split("\0", 1)[0]
    parts = text.split(delimiter)[: max(max_num_substrings, 1)]
    _log.debug("num_split_strings: %d", len(parts))
    return parts


def trim_space(text: str) -> str:
    """Remove leading and trailing whitespace.

    A string made only of whitespace is returned unchanged.
    """
    if text is None:
        raise ValueError("text must not be None")
    stripped = text.strip(_C_SPACE)
    return stripped if stripped else text
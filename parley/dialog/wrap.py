"""
Word wrapping for NPC speech.
"""

from __future__ import annotations

MAX_CHARS_PER_LINE = 50


def wrap_text(text: str, max_width: int = MAX_CHARS_PER_LINE) -> str:
    """
    Wrap text to at most max_width characters per line.

    Scans left to right. When the current line reaches max_width and
    more text follows on it, the line is broken at the most recent space
    of that line (the space is replaced by the newline). A line without
    any space is cut hard after the current character instead. Newlines
    already in the text start a new line.

    Wrapping already wrapped text with the same width returns it
    unchanged.

    Args:
        text: Text to wrap
        max_width: Maximum characters per line

    Returns:
        The wrapped text
    """
    if max_width < 1:
        raise ValueError(f"max_width must be positive, got {max_width}")

    chars = list(text)
    current_length = 0
    last_space = -1
    i = 0

    while i < len(chars):
        char = chars[i]
        if char == "\n":
            current_length = 0
            last_space = -1
            i += 1
            continue

        if char == " ":
            last_space = i
        current_length += 1

        if current_length >= max_width and not _line_ends_after(chars, i):
            if last_space >= 0:
                chars[last_space] = "\n"
                current_length = i - last_space
                last_space = -1
            else:
                chars.insert(i + 1, "\n")
                i += 1
                current_length = 0
        i += 1

    return "".join(chars)


def _line_ends_after(chars: list[str], index: int) -> bool:
    """True when nothing follows index on the same line."""
    return index + 1 >= len(chars) or chars[index + 1] == "\n"

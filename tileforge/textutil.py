"""Small text helpers shared by the project reader and writer."""

from __future__ import annotations


def split(text: str, delim: str) -> list[str]:
    """Split ``text`` on the single character ``delim``.

    Empty fields between delimiters are kept. A trailing delimiter does not
    produce a final empty field, and an empty string yields no fields.
    """
    if len(delim) != 1:
        raise ValueError("delimiter must be a single character")
    parts = text.split(delim)
    if parts[-1] == "":
        parts.pop()
    return parts
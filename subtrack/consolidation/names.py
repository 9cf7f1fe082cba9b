"""Service name canonicalization."""

import re


_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w]", re.ASCII)
_UNDERSCORES = re.compile(r"_+")


def canonicalize(name: str) -> str:
    """
    Map a free-text service name to a comparable key.

    "Apple Music" -> "apple_music", " Disney+ " -> "disney".
    Idempotent.
    """
    key = name.lower()
    key = _WHITESPACE.sub("_", key)
    key = _NON_WORD.sub("", key)
    key = _UNDERSCORES.sub("_", key)
    return key.strip("_")

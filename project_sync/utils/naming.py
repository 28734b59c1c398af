"""Identifier casing helpers for generated artifact names and paths."""

import re
from typing import Optional

_WORD_SPLIT = re.compile(r"[_\s-]")
_UPPER = re.compile(r"([A-Z])")
_EDGE_UNDERSCORES = re.compile(r"^_+|_+$")
_UNDERSCORE_RUNS = re.compile(r"_+")


def to_pascal_case(value: Optional[str]) -> str:
    """Convert ``project_bugs`` / ``project bugs`` to ``ProjectBugs``."""
    if not value:
        return ""
    return "".join(
        word[:1].upper() + word[1:].lower()
        for word in _WORD_SPLIT.split(value)
    )


def to_camel_case(value: Optional[str]) -> str:
    """Convert ``project_bugs`` to ``projectBugs``."""
    pascal = to_pascal_case(value)
    return pascal[:1].lower() + pascal[1:]


def to_kebab_case(value: Optional[str]) -> str:
    """Convert a name to a route segment.

    A hyphen is inserted before every uppercase letter before edge
    underscores are stripped, so ``ProjectBugs`` yields ``-project-bugs``.
    """
    if not value:
        return ""
    hyphenated = _UPPER.sub(r"-\1", value).lower()
    stripped = _EDGE_UNDERSCORES.sub("", hyphenated)
    return _UNDERSCORE_RUNS.sub("-", stripped)

"""Display-width helpers for labels: measuring and truncating by cells.

Labels are plain file and group names. Widths are taken per grapheme
cluster so emoji and wide CJK characters are never split or miscounted.
"""

from __future__ import annotations

import os
from typing import Any

import grapheme
import wcwidth as _wcwidth

ELLIPSIS = "…"

_EMOJI_PRESENTATION = "\ufe0f"


def _cluster_width(cluster: str) -> int:
    """Cells taken by one grapheme cluster.

    The base character decides the width; combining marks and joiners
    that follow it add nothing. An emoji presentation selector forces
    two cells.
    """
    if _EMOJI_PRESENTATION in cluster:
        return 2
    return max(_wcwidth.wcwidth(cluster[0]), 0)


def visible_width(text: str) -> int:
    """Number of terminal cells *text* occupies."""
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(_cluster_width(g) for g in grapheme.graphemes(text))


def measure(*parts: Any) -> int:
    """Summed display width of all *parts* (converted with ``str``)."""
    return sum(visible_width(str(part)) for part in parts)


def truncate_by_cell(text: str, col_limit: int) -> str:
    """Longest prefix of *text* that fits in *col_limit* cells.

    Never breaks a grapheme cluster.
    """
    if col_limit <= 0:
        return ""
    result: list[str] = []
    width = 0
    for g in grapheme.graphemes(text):
        w = _cluster_width(g)
        if width + w > col_limit:
            break
        result.append(g)
        width += w
    return "".join(result)


def truncate_name(name: str, limit: int) -> str:
    """Shorten *name* to at most *limit* cells, ending in an ellipsis.

    Dropping the extension is tried first; if the stem still does not fit
    the name is cut abruptly.
    """
    if visible_width(name) <= limit:
        return name
    if limit <= 0:
        return ""
    stem, ext = os.path.splitext(name)
    if ext and stem and visible_width(stem) < limit:
        return stem + ELLIPSIS
    return truncate_by_cell(name, limit - 1) + ELLIPSIS


_FALSY_STRINGS = frozenset({"", "0", "false", "nil"})


def is_truthy(value: Any) -> bool:
    """Loose truthiness for values coming from configuration.

    ``None``, ``False``, ``0``, ``""``, ``"0"``, ``"false"`` and ``"nil"``
    are false; everything else is true.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    if isinstance(value, str) and value in _FALSY_STRINGS:
        return False
    return True

"""Interfaces the engine expects from its host editor."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Callable, Protocol

from pi.bufferline.types import Element, Group


class ElementSource(Protocol):
    """Live buffers/tabs. Polled at the start of every render pass."""

    def list_live_elements(self) -> Sequence[Element]: ...


# Builds the visible part of one element (icon, label, close button ...).
ComponentFactory = Callable[[Element], Any]

# Maps a group to the highlight used on its boundary markers.
HighlightResolver = Callable[[Group], "str | None"]


def default_component_factory(element: Element) -> str:
    return element.name

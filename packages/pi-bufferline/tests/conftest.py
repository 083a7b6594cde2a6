"""Shared fixtures: an in-memory host standing in for the editor."""

from __future__ import annotations

import pytest

from pi.bufferline.types import Element, ElementId


class FakeHost:
    """In-memory element source that records which buffers are open.

    Implements the ``ElementSource`` protocol from ``pi.bufferline.host``.
    """

    def __init__(self) -> None:
        self._elements: list[Element] = []
        self._next_id = 1
        self.polls = 0

    def open(self, path: str, **kwargs: bool) -> Element:
        element = Element.from_path(self._next_id, path, **kwargs)
        self._next_id += 1
        self._elements.append(element)
        return element

    def close(self, element_id: ElementId) -> None:
        self._elements = [e for e in self._elements if e.id != element_id]

    def find(self, name: str) -> Element:
        return next(e for e in self._elements if e.name == name)

    # -- ElementSource protocol ----------------------------------------------

    def list_live_elements(self) -> list[Element]:
        self.polls += 1
        return list(self._elements)


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def elements() -> list[Element]:
    """The three buffers used throughout the grouping scenarios."""
    return [
        Element.from_path(1, "dummy-1.txt"),
        Element.from_path(2, "dummy-2.txt"),
        Element.from_path(3, "file-2.txt"),
    ]

"""Sticky per-element group assignments (pinning and manual groups)."""

from __future__ import annotations

from collections.abc import Iterable

from pi.bufferline.types import PINNED, ElementId, GroupKey


class OverrideStore:
    """Maps element ids to a manually chosen group.

    Overrides outlive render passes and win over any matcher. They are
    removed only by ``clear_override``/``toggle_pin`` or when the element
    goes away (``remove``/``prune``).
    """

    def __init__(self) -> None:
        self._overrides: dict[ElementId, GroupKey] = {}

    def set_override(self, element_id: ElementId, group: GroupKey | str) -> None:
        if isinstance(group, str):
            group = GroupKey(group)
        self._overrides[element_id] = group

    def clear_override(self, element_id: ElementId) -> None:
        self._overrides.pop(element_id, None)

    def get_override(self, element_id: ElementId) -> GroupKey | None:
        return self._overrides.get(element_id)

    def toggle_pin(self, element_id: ElementId) -> bool:
        """Pin or unpin an element. Returns the new pinned state."""
        if self.is_pinned(element_id):
            del self._overrides[element_id]
            return False
        self._overrides[element_id] = PINNED
        return True

    def pin(self, element_id: ElementId) -> None:
        self._overrides[element_id] = PINNED

    def unpin(self, element_id: ElementId) -> None:
        if self.is_pinned(element_id):
            del self._overrides[element_id]

    def is_pinned(self, element_id: ElementId) -> bool:
        override = self._overrides.get(element_id)
        return override is not None and override.pinned

    def remove(self, element_id: ElementId) -> None:
        """Forget a destroyed element."""
        self._overrides.pop(element_id, None)

    def prune(self, live_ids: Iterable[ElementId]) -> None:
        """Drop overrides for elements not in *live_ids*."""
        live = set(live_ids)
        for element_id in [eid for eid in self._overrides if eid not in live]:
            del self._overrides[element_id]

    def clear(self) -> None:
        self._overrides.clear()

    def snapshot(self) -> dict[ElementId, GroupKey]:
        return dict(self._overrides)

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._overrides

    def __len__(self) -> int:
        return len(self._overrides)

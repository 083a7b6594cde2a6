"""Order elements group by group."""

from __future__ import annotations

import functools
from collections.abc import Sequence
from typing import Any, Callable

from pi.bufferline.classifier import Classification
from pi.bufferline.registry import MatcherRegistry
from pi.bufferline.types import UNGROUPED, Element, GroupKey

GroupSorter = Callable[[list[Element]], list[Element]]

Partition = dict[GroupKey, list[Element]]


def by_key(key: Callable[[Element], Any], *, reverse: bool = False) -> GroupSorter:
    """Build a group sorter from a sort key."""

    def sort_group(elements: list[Element]) -> list[Element]:
        return sorted(elements, key=key, reverse=reverse)

    return sort_group


def by_comparator(cmp: Callable[[Element, Element], int]) -> GroupSorter:
    """Build a group sorter from an old-style three-way comparator."""
    return by_key(functools.cmp_to_key(cmp))


def sort_by_groups(
    elements: Sequence[Element],
    classification: Classification,
    registry: MatcherRegistry,
    sort_group: GroupSorter | None = None,
) -> tuple[list[Element], Partition]:
    """Partition *elements* by group and concatenate the groups in order.

    Group order is pinned, registered groups by priority, groups that only
    exist through manual overrides (in order of first appearance), then
    ungrouped elements. *sort_group* is applied to each group on its own and
    can never move an element into another group. Without it, the input
    order is kept.

    Returns the flat order and the per-group partition. The partition lists
    every group, including empty ones.
    """
    partition: Partition = {group.key: [] for group in registry.classify_priority_order()}
    ungrouped: list[Element] = []
    for element in elements:
        key = classification.get(element.id, UNGROUPED)
        if key.ungrouped:
            ungrouped.append(element)
        else:
            partition.setdefault(key, []).append(element)
    partition[UNGROUPED] = ungrouped

    ordered: list[Element] = []
    for key, members in partition.items():
        if sort_group is not None and members:
            members = list(sort_group(list(members)))
            partition[key] = members
        ordered.extend(members)
    return ordered, partition

"""Registry of named groups and their matchers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from pi.bufferline.errors import ConfigError
from pi.bufferline.matchers import coerce_matcher
from pi.bufferline.types import PINNED, UNGROUPED, Group, GroupKey, GroupSpec

logger = logging.getLogger(__name__)

PIN_ICON = "📌"

UNGROUPED_PRIORITY = 1 << 30

ungrouped_group = Group(key=UNGROUPED, priority=UNGROUPED_PRIORITY, markers=False)


def pinned_group(*, markers: bool = False, highlight: str | None = None) -> Group:
    """The built-in pinned group. Always ordered before every other group."""
    return Group(
        key=PINNED,
        priority=-1,
        matcher=None,
        highlight=highlight,
        icon=PIN_ICON,
        markers=markers,
    )


class MatcherRegistry:
    """Ordered set of groups used for classification.

    ``register`` replaces the whole registry; a rejected configuration
    leaves the previous one active.
    """

    def __init__(self, pinned: Group | None = None) -> None:
        self._pinned = pinned or pinned_group()
        self._groups: list[Group] = []
        self._by_name: dict[str, Group] = {}

    def register(self, specs: Iterable[GroupSpec]) -> None:
        """Validate *specs* and make them the active groups.

        Raises:
            ConfigError: On an empty or duplicate name, or a malformed matcher.
        """
        indexed: list[tuple[int, int, Group]] = []
        seen: set[str] = set()
        for index, spec in enumerate(specs):
            if not spec.name:
                raise ConfigError(f"Group #{index + 1} has no name")
            if spec.name in seen:
                raise ConfigError(f"Duplicate group name '{spec.name}'", spec.name)
            seen.add(spec.name)
            if spec.matcher is None:
                raise ConfigError(f"Group '{spec.name}' has no matcher", spec.name)
            matcher = coerce_matcher(spec.matcher, spec.name)
            priority = spec.priority if spec.priority is not None else index
            group = Group(
                key=GroupKey(spec.name),
                priority=priority,
                matcher=matcher,
                highlight=spec.highlight,
                icon=spec.icon,
                markers=spec.markers,
            )
            indexed.append((priority, index, group))

        indexed.sort(key=lambda item: (item[0], item[1]))
        self._groups = [group for _, _, group in indexed]
        self._by_name = {group.name: group for group in self._groups}
        logger.debug("Registered %d groups: %s", len(self._groups), self.names())

    def set_pinned(self, pinned: Group) -> None:
        self._pinned = pinned

    @property
    def pinned(self) -> Group:
        return self._pinned

    def classify_priority_order(self) -> list[Group]:
        """Groups in output order, pinned first regardless of priority values."""
        return [self._pinned, *self._groups]

    def matcher_groups(self) -> list[Group]:
        """Registered (matcher-backed) groups in priority order."""
        return list(self._groups)

    def get(self, key: GroupKey | str) -> Group | None:
        if isinstance(key, GroupKey):
            if key.pinned:
                return self._pinned
            if key.ungrouped:
                return None
            key = key.name
        return self._by_name.get(key)

    def names(self) -> list[str]:
        return [group.name for group in self._groups]

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (GroupKey, str)):
            return self.get(key) is not None
        return False

    def __iter__(self) -> Iterator[Group]:
        return iter(self.classify_priority_order())

    def __len__(self) -> int:
        return len(self._groups)

    def group_for(self, key: GroupKey) -> Group:
        """Return the group for *key*, inventing one for unregistered keys.

        Unregistered names come from manual overrides; they sort after every
        registered group and before ungrouped elements.
        """
        if key.ungrouped:
            return ungrouped_group
        group = self.get(key)
        if group is not None:
            return group
        last = self._groups[-1].priority if self._groups else 0
        return Group(key=key, priority=last + 1)

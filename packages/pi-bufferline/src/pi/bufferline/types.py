"""Core data types: elements, group keys and group definitions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pi.bufferline.matchers import Matcher

ElementId = int


@dataclass(frozen=True)
class Element:
    """Snapshot of one buffer/tab as reported by the host.

    The engine only ever reads these fields.
    """

    id: ElementId
    name: str
    path: str = ""
    extension: str = ""
    is_directory: bool = False
    is_terminal: bool = False

    @classmethod
    def from_path(
        cls,
        element_id: ElementId,
        path: str,
        *,
        is_directory: bool = False,
        is_terminal: bool = False,
    ) -> Element:
        name = os.path.basename(path.rstrip("/\\")) or path
        _, ext = os.path.splitext(name)
        return cls(
            id=element_id,
            name=name,
            path=path,
            extension=ext.lstrip("."),
            is_directory=is_directory,
            is_terminal=is_terminal,
        )


@dataclass(frozen=True)
class GroupKey:
    """Identity of a group.

    ``pinned`` and ``ungrouped`` mark the two built-in groups, so a user
    group that happens to be called "pinned" never collides with them.
    """

    name: str
    pinned: bool = False
    ungrouped: bool = False

    @property
    def builtin(self) -> bool:
        return self.pinned or self.ungrouped


PINNED = GroupKey("pinned", pinned=True)
UNGROUPED = GroupKey("ungrouped", ungrouped=True)


@dataclass(frozen=True)
class GroupSpec:
    """A group as written in configuration."""

    name: str
    matcher: object
    priority: int | None = None
    highlight: str | None = None
    icon: str = ""
    markers: bool = True


@dataclass(frozen=True)
class Group:
    """A validated, registered group."""

    key: GroupKey
    priority: int
    matcher: Matcher | None = None
    highlight: str | None = None
    icon: str = ""
    markers: bool = True

    @property
    def name(self) -> str:
        return self.key.name

    @property
    def display_name(self) -> str:
        if self.icon:
            return f"{self.icon} {self.key.name}"
        return self.key.name

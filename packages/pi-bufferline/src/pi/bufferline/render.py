"""Render components and group boundary markers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal, Union

from pi.bufferline.classifier import Classification
from pi.bufferline.host import ComponentFactory, HighlightResolver
from pi.bufferline.registry import MatcherRegistry
from pi.bufferline.text import truncate_name
from pi.bufferline.types import UNGROUPED, Element, Group, GroupKey

ComponentKind = Literal["element", "group_start", "group_end"]


@dataclass(frozen=True)
class ElementComponent:
    element: Element
    component: Any

    @property
    def kind(self) -> ComponentKind:
        return "element"


@dataclass(frozen=True)
class GroupStartMarker:
    group: GroupKey
    label: str
    highlight: str | None = None

    @property
    def kind(self) -> ComponentKind:
        return "group_start"


@dataclass(frozen=True)
class GroupEndMarker:
    group: GroupKey
    label: str
    highlight: str | None = None

    @property
    def kind(self) -> ComponentKind:
        return "group_end"


RenderComponent = Union[ElementComponent, GroupStartMarker, GroupEndMarker]


def _marker_label(group: Group, max_length: int | None) -> str:
    label = group.display_name
    if max_length is not None:
        label = truncate_name(label, max_length)
    return label


def render(
    ordered: Sequence[Element],
    classification: Classification,
    registry: MatcherRegistry,
    component_factory: ComponentFactory,
    *,
    highlight_resolver: HighlightResolver | None = None,
    max_group_name_length: int | None = None,
) -> list[RenderComponent]:
    """Build the component sequence for an already sorted element list.

    Each contiguous run of a group is wrapped in a start and an end marker.
    Groups with markers disabled (ungrouped always, pinned by default) are
    emitted bare.
    """
    components: list[RenderComponent] = []
    open_group: Group | None = None
    current: GroupKey | None = None
    label = ""
    highlight: str | None = None

    for element in ordered:
        key = classification.get(element.id, UNGROUPED)
        if key != current:
            if open_group is not None:
                components.append(GroupEndMarker(open_group.key, label, highlight))
                open_group = None
            group = registry.group_for(key)
            if group.markers and not key.ungrouped:
                label = _marker_label(group, max_group_name_length)
                highlight = (
                    highlight_resolver(group) if highlight_resolver else group.highlight
                )
                components.append(GroupStartMarker(group.key, label, highlight))
                open_group = group
            current = key
        components.append(ElementComponent(element, component_factory(element)))

    if open_group is not None:
        components.append(GroupEndMarker(open_group.key, label, highlight))
    return components


def describe(components: Sequence[RenderComponent]) -> list[str]:
    """Stable one-line-per-component snapshot of a render.

    Marker lines tag the group as ``builtin`` (pinned) or ``group`` so a user
    group named "pinned" never reads the same as the pinned group.
    """
    lines: list[str] = []
    for component in components:
        if isinstance(component, ElementComponent):
            lines.append(f"element:{component.element.id}:{component.element.name}")
        else:
            origin = "builtin" if component.group.builtin else "group"
            lines.append(
                f"{component.kind}:{origin}:{component.group.name}:{component.label}"
            )
    return lines

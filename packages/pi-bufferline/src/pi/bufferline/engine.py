"""Bufferline: ties classification, ordering, markers and pick letters together.

One ``render`` call is one full pass over the host's live elements. Nothing
is cached between passes except the override store and the pick tables,
which change only through the host action methods.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pi.bufferline.classifier import Classification, Classifier
from pi.bufferline.config import BufferlineOptions, parse_options
from pi.bufferline.errors import ConfigError
from pi.bufferline.host import (
    ComponentFactory,
    ElementSource,
    HighlightResolver,
    default_component_factory,
)
from pi.bufferline.notify import Notifier, get_notifier
from pi.bufferline.overrides import OverrideStore
from pi.bufferline.pick import PickAssigner, SetKey
from pi.bufferline.registry import MatcherRegistry, pinned_group
from pi.bufferline.render import RenderComponent, render
from pi.bufferline.sorter import Partition, sort_by_groups
from pi.bufferline.types import Element, ElementId, GroupKey

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    elements: list[Element]
    components: list[RenderComponent]
    partition: Partition
    classification: Classification
    picks: dict[ElementId, str]

    def counts(self) -> dict[GroupKey, int]:
        """Number of elements per group, empty groups included.

        Keyed by ``GroupKey`` so a user group named "pinned" or "ungrouped"
        is counted apart from the built-in group of that name.
        """
        return {key: len(members) for key, members in self.partition.items()}


class Bufferline:
    """Element strip engine for one host.

    Usage:
        line = Bufferline(source, {"groups": {"items": [...]}})
        result = line.render()
        line.toggle_pin(result.elements[0].id)
    """

    def __init__(
        self,
        source: ElementSource,
        options: BufferlineOptions | dict[str, Any] | None = None,
        *,
        component_factory: ComponentFactory | None = None,
        highlight_resolver: HighlightResolver | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._source = source
        self._component_factory = component_factory or default_component_factory
        self._highlight_resolver = highlight_resolver
        self._notifier = notifier or get_notifier()
        self.options = BufferlineOptions()
        self.registry = MatcherRegistry()
        self.overrides = OverrideStore()
        self.picks = PickAssigner(self.options.pick)
        self.classifier = Classifier(self.registry, self.overrides, notifier=self._notifier)
        if options is not None:
            self.setup(options)

    # --- Configuration ---

    def setup(self, options: BufferlineOptions | dict[str, Any] | None = None) -> None:
        """Apply new options. On error the current configuration stays active.

        Raises:
            ConfigError: If the options or group definitions are invalid.
        """
        try:
            parsed = options if isinstance(options, BufferlineOptions) else parse_options(options)
            self.registry.register(parsed.groups.items)
        except ConfigError as exc:
            self._notifier.notify(f"Invalid group configuration: {exc}", "error")
            raise

        self.registry.set_pinned(
            pinned_group(
                markers=parsed.groups.pinned_markers,
                highlight=parsed.groups.pinned_highlight,
            )
        )
        self.classifier.set_registry(self.registry)
        self.classifier.unknown_override = parsed.groups.unknown_override
        if parsed.pick != self.picks.policy:
            self.picks.policy = parsed.pick
            self.picks.clear()
        self.options = parsed
        logger.info("Bufferline configured with groups %s", self.registry.names())

    def teardown(self) -> None:
        """Drop all state that outlives a render pass."""
        self.overrides.clear()
        self.picks.clear()

    # --- Render pass ---

    def render(self, set_key: SetKey = "default") -> RenderResult:
        elements = list(self._source.list_live_elements())
        self.overrides.prune(element.id for element in elements)

        classification = self.classifier.classify(elements)
        ordered, partition = sort_by_groups(
            elements, classification, self.registry, self.options.groups.sort
        )
        components = render(
            ordered,
            classification,
            self.registry,
            self._component_factory,
            highlight_resolver=self._highlight_resolver,
            max_group_name_length=self.options.groups.max_name_length,
        )
        picks = self.picks.assign(ordered, set_key)
        return RenderResult(
            elements=ordered,
            components=components,
            partition=partition,
            classification=classification,
            picks=picks,
        )

    # --- Host actions ---

    def toggle_pin(self, element_id: ElementId) -> bool:
        pinned = self.overrides.toggle_pin(element_id)
        logger.debug("Element %s %s", element_id, "pinned" if pinned else "unpinned")
        return pinned

    def set_group(self, element_id: ElementId, name: str) -> None:
        if name not in self.registry:
            logger.debug("Element %s assigned to unregistered group '%s'", element_id, name)
        self.overrides.set_override(element_id, name)

    def clear_group(self, element_id: ElementId) -> None:
        self.overrides.clear_override(element_id)

    def get_group(self, element_id: ElementId) -> GroupKey | None:
        """The manual group of an element, if it has one."""
        return self.overrides.get_override(element_id)

    def element_closed(self, element_id: ElementId) -> None:
        self.overrides.remove(element_id)
        self.picks.release(element_id)

    def pick(self, letter: str, set_key: SetKey = "default") -> ElementId | None:
        """Element bound to *letter* in *set_key*, for jump-to navigation."""
        return self.picks.element_for(letter, set_key)

"""Resolve each element to exactly one group."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Literal

from pi.bufferline.errors import ClassificationWarning
from pi.bufferline.notify import Notifier, get_notifier
from pi.bufferline.overrides import OverrideStore
from pi.bufferline.registry import MatcherRegistry
from pi.bufferline.types import UNGROUPED, Element, ElementId, Group, GroupKey

logger = logging.getLogger(__name__)

UnknownOverridePolicy = Literal["singleton", "ignore"]

Classification = dict[ElementId, GroupKey]


class Classifier:
    """Assigns groups: manual override first, then the first matching group.

    Elements nothing matches land in ``UNGROUPED``. A matcher that raises
    counts as "no match"; the failure is reported once per group.
    """

    def __init__(
        self,
        registry: MatcherRegistry,
        overrides: OverrideStore,
        *,
        unknown_override: UnknownOverridePolicy = "singleton",
        notifier: Notifier | None = None,
    ) -> None:
        self._registry = registry
        self._overrides = overrides
        self.unknown_override: UnknownOverridePolicy = unknown_override
        self._notifier = notifier
        self._failed_groups: set[str] = set()
        self.warnings: list[ClassificationWarning] = []

    @property
    def registry(self) -> MatcherRegistry:
        return self._registry

    def set_registry(self, registry: MatcherRegistry) -> None:
        self._registry = registry
        self._failed_groups.clear()
        self.warnings.clear()

    def classify(self, elements: Sequence[Element]) -> Classification:
        groups = self._registry.matcher_groups()
        result: Classification = {}
        for element in elements:
            result[element.id] = self._resolve(element, groups)
        return result

    def resolve(self, element: Element) -> GroupKey:
        return self._resolve(element, self._registry.matcher_groups())

    def _resolve(self, element: Element, groups: list[Group]) -> GroupKey:
        override = self._overrides.get_override(element.id)
        if override is not None:
            if override.builtin or override in self._registry:
                return override
            if self.unknown_override == "singleton":
                return override
            logger.debug(
                "Ignoring override of %s to unregistered group '%s'",
                element.name,
                override.name,
            )

        for group in groups:
            try:
                matched = group.matcher.matches(element)
            except Exception as exc:
                self._report(group.name, element, exc)
                continue
            if matched:
                return group.key
        return UNGROUPED

    def _report(self, group: str, element: Element, exc: Exception) -> None:
        if group in self._failed_groups:
            logger.debug("Matcher for '%s' failed again on %s", group, element.name)
            return
        self._failed_groups.add(group)
        warning = ClassificationWarning(
            group=group, element_name=element.name, error=f"{type(exc).__name__}: {exc}"
        )
        self.warnings.append(warning)
        (self._notifier or get_notifier()).notify(str(warning), "warn")

"""Group matchers.

A matcher decides whether an element belongs to a group, using only the
element's metadata. Configuration may give a matcher as:

* an object with a ``matches(element) -> bool`` method
* a plain callable ``(element) -> truthy``
* a glob string, matched against the element name (``"*dummy*"``)
* a compiled regular expression, searched in the element name
* a dict with one of the keys ``glob``, ``regex``, ``extension``
"""

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable

from pi.bufferline.errors import ConfigError
from pi.bufferline.types import Element


@runtime_checkable
class Matcher(Protocol):
    def matches(self, element: Element) -> bool: ...


@dataclass(frozen=True)
class GlobMatcher:
    pattern: str
    field: str = "name"

    def matches(self, element: Element) -> bool:
        return fnmatch.fnmatchcase(getattr(element, self.field), self.pattern)


@dataclass(frozen=True)
class RegexMatcher:
    pattern: re.Pattern[str]
    field: str = "name"

    def matches(self, element: Element) -> bool:
        return self.pattern.search(getattr(element, self.field)) is not None


@dataclass(frozen=True)
class ExtensionMatcher:
    extensions: frozenset[str]

    def matches(self, element: Element) -> bool:
        return element.extension.lower() in self.extensions


@dataclass(frozen=True)
class PredicateMatcher:
    """Adapts a bare function to the ``Matcher`` protocol."""

    predicate: Callable[[Element], Any]

    def matches(self, element: Element) -> bool:
        return bool(self.predicate(element))


def _extensions(value: Any) -> frozenset[str]:
    if isinstance(value, str):
        value = [value]
    return frozenset(str(ext).lstrip(".").lower() for ext in value)


def coerce_matcher(value: Any, group: str | None = None) -> Matcher:
    """Turn a configured matcher value into a ``Matcher``.

    Raises:
        ConfigError: If the value has no matcher interpretation.
    """
    if isinstance(value, Matcher) and not isinstance(value, type):
        return value
    if isinstance(value, str):
        if not value:
            raise ConfigError("Empty glob matcher", group)
        return GlobMatcher(value)
    if isinstance(value, re.Pattern):
        return RegexMatcher(value)
    if isinstance(value, dict):
        if len(value) != 1:
            raise ConfigError(
                f"Matcher dict needs exactly one of glob/regex/extension, got {sorted(value)}",
                group,
            )
        kind, arg = next(iter(value.items()))
        if kind == "glob":
            return coerce_matcher(str(arg), group)
        if kind == "regex":
            try:
                return RegexMatcher(re.compile(arg))
            except (re.error, TypeError) as exc:
                raise ConfigError(f"Invalid regex matcher {arg!r}: {exc}", group) from exc
        if kind == "extension":
            return ExtensionMatcher(_extensions(arg))
        raise ConfigError(f"Unknown matcher kind {kind!r}", group)
    if callable(value):
        return PredicateMatcher(value)
    raise ConfigError(f"Unsupported matcher {value!r}", group)

"""Bufferline options: defaults, deep merge and parsing from plain dicts.

Options arrive as nested dicts (for example decoded from a host's config
file). ``None`` values mean "use the default".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pi.bufferline.classifier import UnknownOverridePolicy
from pi.bufferline.errors import ConfigError
from pi.bufferline.pick import DEFAULT_ALPHABET, PickPolicy
from pi.bufferline.sorter import GroupSorter, by_key
from pi.bufferline.text import is_truthy
from pi.bufferline.types import GroupSpec

UNKNOWN_OVERRIDE_POLICIES = ("singleton", "ignore")

# Named per-group sort orders accepted in place of a callable.
SORTERS: dict[str, GroupSorter] = {
    "id": by_key(lambda element: element.id),
    "name": by_key(lambda element: element.name),
    "name_desc": by_key(lambda element: element.name, reverse=True),
    "extension": by_key(lambda element: (element.extension, element.name)),
    "directory": by_key(lambda element: (element.path.rsplit("/", 1)[0], element.name)),
}


def _options_defaults() -> dict[str, Any]:
    return {
        "groups": {
            "items": [],
            "pinned_markers": False,
            "pinned_highlight": None,
            "unknown_override": "singleton",
            "max_name_length": 18,
            "sort": None,
        },
        "pick": {
            "alphabet": DEFAULT_ALPHABET,
            "name_letters": 1,
            "prefer_name": True,
        },
    }


def deep_merge_options(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *overrides* into *base*.

    Nested dicts merge; lists and scalars replace. ``None`` never overrides.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_options(result[key], value)
        else:
            result[key] = value
    return result


@dataclass
class GroupOptions:
    items: list[GroupSpec] = field(default_factory=list)
    pinned_markers: bool = False
    pinned_highlight: str | None = None
    unknown_override: UnknownOverridePolicy = "singleton"
    max_name_length: int | None = 18
    sort: GroupSorter | None = None


@dataclass
class BufferlineOptions:
    groups: GroupOptions = field(default_factory=GroupOptions)
    pick: PickPolicy = field(default_factory=PickPolicy)


def _group_spec(raw: Any, index: int) -> GroupSpec:
    if isinstance(raw, GroupSpec):
        return raw
    if not isinstance(raw, dict):
        raise ConfigError(f"Group #{index + 1} must be a mapping, got {type(raw).__name__}")
    name = raw.get("name")
    if not isinstance(name, str):
        raise ConfigError(f"Group #{index + 1} needs a string name")
    priority = raw.get("priority")
    if priority is not None and (isinstance(priority, bool) or not isinstance(priority, int)):
        raise ConfigError(f"Priority of group '{name}' must be an integer", name)
    return GroupSpec(
        name=name,
        matcher=raw.get("matcher"),
        priority=priority,
        highlight=raw.get("highlight"),
        icon=raw.get("icon") or "",
        markers=is_truthy(raw.get("markers", True)),
    )


def _sorter(value: Any) -> GroupSorter | None:
    if value is None or callable(value):
        return value
    if isinstance(value, str) and value in SORTERS:
        return SORTERS[value]
    raise ConfigError(f"Unknown group sort {value!r}; expected one of {sorted(SORTERS)}")


def _positive_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{what} must be a non-negative integer, got {value!r}")
    return value


def parse_options(raw: dict[str, Any] | None = None) -> BufferlineOptions:
    """Build ``BufferlineOptions`` from a (possibly partial) options dict.

    Accepts the options either bare or wrapped in ``{"options": {...}}``.

    Raises:
        ConfigError: If a value has the wrong shape.
    """
    raw = raw or {}
    if "options" in raw and isinstance(raw["options"], dict):
        raw = raw["options"]
    merged = deep_merge_options(_options_defaults(), _copy_structure(raw))

    groups_raw = merged["groups"]
    items = groups_raw.get("items") or []
    if not isinstance(items, (list, tuple)):
        raise ConfigError("groups.items must be a list")

    unknown = groups_raw.get("unknown_override")
    if unknown not in UNKNOWN_OVERRIDE_POLICIES:
        raise ConfigError(
            f"groups.unknown_override must be one of {UNKNOWN_OVERRIDE_POLICIES}, got {unknown!r}"
        )

    max_len = groups_raw.get("max_name_length")
    groups = GroupOptions(
        items=[_group_spec(item, i) for i, item in enumerate(items)],
        pinned_markers=is_truthy(groups_raw.get("pinned_markers")),
        pinned_highlight=groups_raw.get("pinned_highlight"),
        unknown_override=unknown,
        max_name_length=None if max_len is None else _positive_int(max_len, "groups.max_name_length"),
        sort=_sorter(groups_raw.get("sort")),
    )

    pick_raw = merged["pick"]
    alphabet = pick_raw.get("alphabet")
    if not isinstance(alphabet, str) or not alphabet:
        raise ConfigError("pick.alphabet must be a non-empty string")
    pick = PickPolicy(
        alphabet=alphabet,
        name_letters=_positive_int(pick_raw.get("name_letters"), "pick.name_letters"),
        prefer_name=is_truthy(pick_raw.get("prefer_name")),
    )
    return BufferlineOptions(groups=groups, pick=pick)


def _copy_structure(raw: dict[str, Any]) -> dict[str, Any]:
    """Copy the dict structure but keep callables and matchers shared."""
    result: dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, dict):
            result[key] = _copy_structure(value)
        elif isinstance(value, list):
            result[key] = list(value)
        else:
            result[key] = value
    return result

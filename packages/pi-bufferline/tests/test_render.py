"""Tests for pi.bufferline.render -- group boundary markers."""

from __future__ import annotations

from pi.bufferline.classifier import Classifier
from pi.bufferline.notify import Notifier
from pi.bufferline.overrides import OverrideStore
from pi.bufferline.registry import MatcherRegistry, pinned_group
from pi.bufferline.render import (
    ElementComponent,
    GroupEndMarker,
    GroupStartMarker,
    describe,
    render,
)
from pi.bufferline.sorter import by_key, sort_by_groups
from pi.bufferline.types import Element, GroupKey, GroupSpec


def _identity(element: Element) -> Element:
    return element


def _pass(elements, specs, overrides=None, sort_group=None, **render_kwargs):
    registry = MatcherRegistry()
    registry.register(specs)
    if "pinned_markers" in render_kwargs:
        registry.set_pinned(pinned_group(markers=render_kwargs.pop("pinned_markers")))
    classifier = Classifier(registry, overrides or OverrideStore(), notifier=Notifier())
    classification = classifier.classify(elements)
    ordered, _ = sort_by_groups(elements, classification, registry, sort_group)
    return render(ordered, classification, registry, _identity, **render_kwargs)


def _markers(components):
    return [c for c in components if not isinstance(c, ElementComponent)]


class TestGroupMarkers:
    def test_adds_group_markers(self, elements):
        components = _pass(elements, [GroupSpec("test-group", "*dummy*")])
        assert len(components) == 5
        assert [c.kind for c in components] == [
            "group_start",
            "element",
            "element",
            "group_end",
            "element",
        ]
        g_start = components[0]
        assert isinstance(g_start, GroupStartMarker)
        assert "test-group" in g_start.label
        assert components[1].element.name == "dummy-1.txt"
        assert components[2].element.name == "dummy-2.txt"
        assert isinstance(components[3], GroupEndMarker)
        assert components[4].element.name == "file-2.txt"

    def test_component_factory_output_is_kept(self, elements):
        registry = MatcherRegistry()
        classification = {e.id: GroupKey("x") for e in elements}
        components = render(elements, classification, registry, lambda e: f"<{e.name}>")
        assert [c.component for c in components if c.kind == "element"] == [
            "<dummy-1.txt>",
            "<dummy-2.txt>",
            "<file-2.txt>",
        ]

    def test_two_markers_per_non_empty_group(self):
        elements = [
            Element.from_path(i, name)
            for i, name in enumerate(
                ["a.txt", "b.txt", "d.dart", "c.dart", "h.js", "g.js", "readme"], start=1
            )
        ]
        components = _pass(
            elements,
            [
                GroupSpec("A", "*.txt"),
                GroupSpec("B", "*.js"),
                GroupSpec("C", "*.dart"),
                GroupSpec("empty", "*.none"),
            ],
        )
        markers = _markers(components)
        assert len(markers) == 6
        for i, component in enumerate(components):
            if isinstance(component, GroupStartMarker):
                assert components[i + 1].kind == "element"
            if isinstance(component, GroupEndMarker):
                assert components[i - 1].kind == "element"
        # ungrouped element comes last and bare
        assert components[-1].kind == "element"
        assert components[-1].element.name == "readme"
        assert all(m.group.name != "empty" for m in markers)

    def test_markers_pair_up(self):
        elements = [Element.from_path(i, f"f{i}.{ext}") for i, ext in enumerate("abab", 1)]
        components = _pass(elements, [GroupSpec("A", "*.a"), GroupSpec("B", "*.b")])
        starts = [c.group for c in components if c.kind == "group_start"]
        ends = [c.group for c in components if c.kind == "group_end"]
        assert starts == ends == [GroupKey("A"), GroupKey("B")]

    def test_sorted_within_groups(self):
        elements = [
            Element.from_path(i, name)
            for i, name in enumerate(
                ["a.txt", "b.txt", "d.dart", "c.dart", "h.js", "g.js"], start=1
            )
        ]
        components = _pass(
            elements,
            [GroupSpec("A", "*.txt"), GroupSpec("B", "*.js"), GroupSpec("C", "*.dart")],
            sort_group=by_key(lambda e: e.name, reverse=True),
        )
        assert components[1].element.name == "b.txt"
        assert components[2].element.name == "a.txt"
        assert components[5].element.name == "h.js"
        assert components[6].element.name == "g.js"
        assert components[9].element.name == "d.dart"
        assert components[10].element.name == "c.dart"

    def test_only_ungrouped_has_no_markers(self, elements):
        components = _pass(elements, [])
        assert [c.kind for c in components] == ["element"] * 3

    def test_group_markers_can_be_disabled(self, elements):
        components = _pass(elements, [GroupSpec("test-group", "*dummy*", markers=False)])
        assert _markers(components) == []


class TestPinnedMarkers:
    def test_pinned_run_bare_by_default(self, elements):
        overrides = OverrideStore()
        overrides.pin(3)
        components = _pass(elements, [GroupSpec("test-group", "*dummy*")], overrides)
        assert components[0].kind == "element"
        assert components[0].element.name == "file-2.txt"
        assert len(_markers(components)) == 2

    def test_pinned_markers_when_enabled(self, elements):
        overrides = OverrideStore()
        overrides.pin(3)
        components = _pass(
            elements, [GroupSpec("test-group", "*dummy*")], overrides, pinned_markers=True
        )
        assert components[0].kind == "group_start"
        assert components[0].group.pinned
        assert "pinned" in components[0].label
        assert components[2].kind == "group_end"


class TestMarkerStyling:
    def test_group_highlight_used(self, elements):
        components = _pass(elements, [GroupSpec("test-group", "*dummy*", highlight="Green")])
        assert components[0].highlight == "Green"
        assert components[3].highlight == "Green"

    def test_highlight_resolver_wins(self, elements):
        components = _pass(
            elements,
            [GroupSpec("test-group", "*dummy*", highlight="Green")],
            highlight_resolver=lambda group: f"Group_{group.name}",
        )
        assert components[0].highlight == "Group_test-group"

    def test_icon_and_truncation(self, elements):
        components = _pass(
            elements,
            [GroupSpec("a-very-long-group-name", "*dummy*", icon="*")],
            max_group_name_length=8,
        )
        label = components[0].label
        assert label.startswith("* a-")
        assert label.endswith("…")
        assert len(label) == 8


class TestIdempotence:
    def test_same_input_same_output(self, elements):
        overrides = OverrideStore()
        overrides.pin(2)
        specs = [GroupSpec("test-group", "*dummy*"), GroupSpec("files", "file*")]
        first = _pass(elements, specs, overrides)
        second = _pass(elements, specs, overrides)
        assert first == second
        assert describe(first) == describe(second)

    def test_describe_format(self, elements):
        lines = describe(_pass(elements, [GroupSpec("test-group", "*dummy*")]))
        assert lines == [
            "group_start:group:test-group:test-group",
            "element:1:dummy-1.txt",
            "element:2:dummy-2.txt",
            "group_end:group:test-group:test-group",
            "element:3:file-2.txt",
        ]

    def test_describe_tells_pinned_from_user_group_named_pinned(self, elements):
        overrides = OverrideStore()
        overrides.pin(3)
        lines = describe(
            _pass(
                elements,
                [GroupSpec("pinned", "*dummy*")],
                overrides,
                pinned_markers=True,
                max_group_name_length=None,
            )
        )
        assert lines[0] == "group_start:builtin:pinned:📌 pinned"
        assert lines[2] == "group_end:builtin:pinned:📌 pinned"
        assert lines[3] == "group_start:group:pinned:pinned"
        assert lines[0] != lines[3]

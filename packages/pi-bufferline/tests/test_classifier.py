"""Tests for pi.bufferline.classifier.Classifier."""

from __future__ import annotations

import logging

import pytest

from pi.bufferline.classifier import Classifier
from pi.bufferline.notify import Notifier
from pi.bufferline.overrides import OverrideStore
from pi.bufferline.registry import MatcherRegistry
from pi.bufferline.types import PINNED, UNGROUPED, Element, GroupKey, GroupSpec


def _setup(*specs: GroupSpec, **kwargs) -> tuple[Classifier, OverrideStore]:
    registry = MatcherRegistry()
    registry.register(specs)
    overrides = OverrideStore()
    return Classifier(registry, overrides, notifier=Notifier(), **kwargs), overrides


class TestMatcherClassification:
    def test_first_matching_group_wins(self, elements):
        classifier, _ = _setup(
            GroupSpec("dummies", "*dummy*"),
            GroupSpec("texts", "*.txt"),
        )
        result = classifier.classify(elements)
        assert result == {
            1: GroupKey("dummies"),
            2: GroupKey("dummies"),
            3: GroupKey("texts"),
        }

    def test_priority_decides_not_config_position(self, elements):
        classifier, _ = _setup(
            GroupSpec("dummies", "*dummy*", priority=2),
            GroupSpec("texts", "*.txt", priority=1),
        )
        result = classifier.classify(elements)
        assert set(result.values()) == {GroupKey("texts")}

    def test_no_match_is_ungrouped(self, elements):
        classifier, _ = _setup(GroupSpec("test-group", "*dummy*"))
        assert classifier.classify(elements)[3] == UNGROUPED

    def test_exactly_one_group_per_element(self, elements):
        classifier, overrides = _setup(GroupSpec("A", "*"), GroupSpec("B", "*"))
        overrides.pin(2)
        result = classifier.classify(elements)
        assert list(result) == [e.id for e in elements]

    def test_each_predicate_runs_at_most_once_per_element(self, elements):
        calls: list[str] = []

        def track(el: Element) -> bool:
            calls.append(el.name)
            return False

        classifier, _ = _setup(GroupSpec("A", track))
        classifier.classify(elements)
        assert calls == [e.name for e in elements]


class TestOverrides:
    def test_override_beats_any_matcher(self, elements):
        classifier, overrides = _setup(GroupSpec("A", "*.txt", priority=-50))
        overrides.pin(1)
        overrides.set_override(3, "A")
        result = classifier.classify(elements)
        assert result[1] == PINNED
        assert result[2] == GroupKey("A")
        assert result[3] == GroupKey("A")

    def test_override_skips_matcher_evaluation(self):
        def boom(el: Element) -> bool:
            raise AssertionError("matcher should not run")

        classifier, overrides = _setup(GroupSpec("A", boom))
        overrides.pin(1)
        assert classifier.resolve(Element(1, "x")) == PINNED

    def test_unknown_override_forms_own_group_by_default(self, elements):
        classifier, overrides = _setup(GroupSpec("A", "*dummy*"))
        overrides.set_override(1, "gone")
        assert classifier.classify(elements)[1] == GroupKey("gone")

    def test_unknown_override_ignored_when_configured(self, elements):
        classifier, overrides = _setup(
            GroupSpec("A", "*dummy*"), unknown_override="ignore"
        )
        overrides.set_override(1, "gone")
        assert classifier.classify(elements)[1] == GroupKey("A")
        # the override is kept and comes back once the group exists
        assert overrides.get_override(1) == GroupKey("gone")
        classifier.registry.register(
            [GroupSpec("A", "*dummy*"), GroupSpec("gone", "*nothing*")]
        )
        assert classifier.classify(elements)[1] == GroupKey("gone")

    def test_pin_ignores_unknown_policy(self, elements):
        classifier, overrides = _setup(unknown_override="ignore")
        overrides.pin(3)
        assert classifier.classify(elements)[3] == PINNED


class TestFailingMatchers:
    @staticmethod
    def _broken(el: Element) -> bool:
        raise RuntimeError("bad matcher")

    def test_raising_matcher_counts_as_no_match(self, elements):
        classifier, _ = _setup(
            GroupSpec("broken", self._broken),
            GroupSpec("texts", "*.txt"),
        )
        result = classifier.classify(elements)
        assert set(result.values()) == {GroupKey("texts")}

    def test_failure_reported_once(self, elements, caplog):
        classifier, _ = _setup(GroupSpec("broken", self._broken))
        with caplog.at_level(logging.WARNING, logger="pi.bufferline"):
            classifier.classify(elements)
            classifier.classify(elements)
        assert len(classifier.warnings) == 1
        warning = classifier.warnings[0]
        assert warning.group == "broken"
        assert warning.element_name == "dummy-1.txt"
        assert "RuntimeError" in warning.error
        reported = [r for r in caplog.records if "broken" in r.getMessage()]
        assert len(reported) == 1

    def test_new_registry_starts_fresh_warnings(self, elements):
        classifier, _ = _setup(GroupSpec("broken", self._broken))
        classifier.classify(elements)
        classifier.set_registry(classifier.registry)
        assert classifier.warnings == []
        classifier.classify(elements)
        assert len(classifier.warnings) == 1

    def test_warnings_do_not_pile_up_across_reconfigurations(self, elements):
        classifier, _ = _setup(GroupSpec("broken", self._broken))
        for _ in range(5):
            classifier.set_registry(classifier.registry)
            classifier.classify(elements)
        assert len(classifier.warnings) == 1

    @pytest.mark.parametrize("exc", [KeyError("k"), TypeError("t"), ValueError("v")])
    def test_any_exception_type_is_contained(self, exc):
        def raiser(el: Element) -> bool:
            raise exc

        classifier, _ = _setup(GroupSpec("x", raiser))
        assert classifier.resolve(Element(1, "a")) == UNGROUPED

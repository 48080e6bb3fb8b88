"""Tests for dependency ordering of component batches."""

from __future__ import annotations

from adcomponents.components import FAILED, Component, order_by_dependencies
from adcomponents.exceptions import DependencyCycleError


def _component(identifier, dependencies=()):
    extension, group, component = Component.parse_component_identifier(identifier)
    cls = type(f"Dep_{group}", (Component,), {"dependencies": tuple(dependencies)})
    return cls(extension, group, component)


class TestOrderByDependencies:
    def test_dependencies_come_first(self, reporter):
        batch = {
            "ox_click": _component("deliveryLog:ox_click:ox_click", ["deliveryDataPrepare:ox_core:ox_core"]),
            "ox_core": _component("deliveryDataPrepare:ox_core:ox_core"),
        }
        ordered = order_by_dependencies(batch, reporter=reporter)
        assert list(ordered) == ["ox_core", "ox_click"]
        assert ordered["ox_click"] is batch["ox_click"]

    def test_independent_components_keep_input_order(self, reporter):
        batch = {
            "c": _component("ext:c:c"),
            "a": _component("ext:a:a"),
            "b": _component("ext:b:b", ["ext:c:c"]),
        }
        assert list(order_by_dependencies(batch, reporter=reporter)) == ["c", "a", "b"]

    def test_transitive(self, reporter):
        batch = {
            "a": _component("ext:a:a", ["ext:b:b"]),
            "b": _component("ext:b:b", ["ext:c:c"]),
            "c": _component("ext:c:c"),
        }
        assert list(order_by_dependencies(batch, reporter=reporter)) == ["c", "b", "a"]

    def test_missing_dependencies_ignored(self, reporter):
        batch = {"a": _component("ext:a:a", ["ext:gone:gone"])}
        assert list(order_by_dependencies(batch, reporter=reporter)) == ["a"]
        assert reporter.errors == []

    def test_self_dependency_ignored(self, reporter):
        batch = {"a": _component("ext:a:a", ["ext:a:a"])}
        assert list(order_by_dependencies(batch, reporter=reporter)) == ["a"]

    def test_cycle_reported(self, reporter):
        batch = {
            "a": _component("ext:a:a", ["ext:b:b"]),
            "b": _component("ext:b:b", ["ext:a:a"]),
        }
        assert order_by_dependencies(batch, reporter=reporter) is FAILED
        assert isinstance(reporter.errors[0], DependencyCycleError)
        assert reporter.messages[0] == "Dependency cycle between components: ext:a:a -> ext:b:b -> ext:a:a"

    def test_empty(self, reporter):
        assert order_by_dependencies({}, reporter=reporter) == {}

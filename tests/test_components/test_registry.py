"""Tests for the explicit component registry."""

from __future__ import annotations

import logging

import pytest

from adcomponents.components import Component, ComponentManager, ComponentRegistry
from adcomponents.models import ComponentDescriptor


# ---------------------------------------------------------------------------
# Helper component classes
# ---------------------------------------------------------------------------


class ClickLogger(Component):
    @classmethod
    def describe(cls):
        return "registered"


class OtherClickLogger(Component):
    pass


CLICK = ComponentDescriptor(extension="deliveryLog", group="ox_click", component="ox_click")


class TestRegistration:
    def test_register_and_get(self):
        registry = ComponentRegistry()
        registry.register(CLICK, ClickLogger)
        assert CLICK in registry
        assert len(registry) == 1
        assert list(registry) == [CLICK]
        assert registry.get(CLICK) is ClickLogger

    def test_rejects_non_components(self):
        registry = ComponentRegistry()
        with pytest.raises(TypeError):
            registry.register(CLICK, dict)  # type: ignore[arg-type]

    def test_decorator_defaults_component_to_group(self):
        registry = ComponentRegistry()

        @registry.component("deliveryLog", "ox_click")
        class Decorated(Component):
            pass

        assert registry.get(CLICK) is Decorated

    def test_replacing_warns(self, caplog):
        registry = ComponentRegistry()
        registry.register(CLICK, ClickLogger)
        with caplog.at_level(logging.WARNING, logger="adcomponents.components.registry"):
            registry.register(CLICK, OtherClickLogger)
        assert registry.get(CLICK) is OtherClickLogger
        assert "Replacing component class" in caplog.text

    def test_unregister(self):
        registry = ComponentRegistry()
        registry.register(CLICK, ClickLogger)
        registry.unregister(CLICK)
        registry.unregister(CLICK)
        assert CLICK not in registry


class TestManagerUsesRegistry:
    def test_registered_class_wins_without_file(self, config, reporter):
        registry = ComponentRegistry()
        registry.register(CLICK, ClickLogger)
        manager = ComponentManager(config, reporter=reporter, registry=registry)

        instance = manager.factory("deliveryLog", "ox_click")
        assert isinstance(instance, ClickLogger)
        assert instance.get_component_identifier() == "deliveryLog:ox_click:ox_click"
        assert manager.call_static_method("deliveryLog", "ox_click", None, "describe") == "registered"
        assert reporter.errors == []

    def test_loaded_classes_are_remembered(self, plugin_tree, manager):
        path = plugin_tree.add_component("deliveryLog", "ox_imp")
        first = manager.get_component_class("deliveryLog", "ox_imp")
        assert manager.registry.get_loaded(path, first.__name__) is first

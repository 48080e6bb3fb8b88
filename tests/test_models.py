"""Tests for the shared Pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from adcomponents.exceptions import InvalidIdentifierError
from adcomponents.models import ComponentDescriptor, DeliveryData, GlobalConfig, ucfirst


class TestUcfirst:
    def test_uppercases_first_character_only(self):
        assert ucfirst("deliveryLog") == "DeliveryLog"
        assert ucfirst("ox_click") == "Ox_click"

    def test_empty_string(self):
        assert ucfirst("") == ""


class TestComponentDescriptor:
    def test_identifier(self):
        d = ComponentDescriptor(extension="deliveryLog", group="ox_click", component="ox_click")
        assert d.identifier == "deliveryLog:ox_click:ox_click"

    def test_class_name(self):
        d = ComponentDescriptor(extension="deliveryLimitations", group="Client", component="Os")
        assert d.class_name == "Plugins_DeliveryLimitations_Client_Os"

    def test_class_name_keeps_inner_case(self):
        d = ComponentDescriptor(extension="bannerTypeHtml", group="demoGroup", component="fooBar")
        assert d.class_name == "Plugins_BannerTypeHtml_DemoGroup_FooBar"

    def test_parse_round_trip(self):
        d = ComponentDescriptor.parse("deliveryLog:ox_click:ox_click")
        assert d.as_tuple() == ("deliveryLog", "ox_click", "ox_click")
        assert ComponentDescriptor.parse(d.identifier) == d

    def test_parse_allows_empty_group(self):
        d = ComponentDescriptor.parse("deliveryLog::ox_click")
        assert d.group == ""
        assert d.component == "ox_click"

    @pytest.mark.parametrize(
        "identifier",
        ["deliveryLog", "deliveryLog:ox_click", "a:b:c:d", ":ox_click:ox_click", ""],
    )
    def test_parse_rejects_malformed(self, identifier):
        with pytest.raises(InvalidIdentifierError):
            ComponentDescriptor.parse(identifier)

    def test_parse_rejects_non_string(self):
        with pytest.raises(InvalidIdentifierError, match="must be a string"):
            ComponentDescriptor.parse(42)  # type: ignore[arg-type]

    def test_frozen_and_hashable(self):
        d = ComponentDescriptor(extension="deliveryLog", group="ox_click", component="ox_click")
        with pytest.raises(ValidationError):
            d.group = "other"  # type: ignore[misc]
        assert {d: 1}[ComponentDescriptor.parse(d.identifier)] == 1


class TestGlobalConfig:
    def test_defaults(self):
        config = GlobalConfig()
        assert config.plugin_paths.extensions is None
        assert config.plugin_group_components == {}
        assert config.output.format == "auto"

    def test_from_dict(self):
        config = GlobalConfig.model_validate(
            {
                "plugin_paths": {"extensions": "/srv/plugins"},
                "plugin_group_components": {"Client": True, "Geo": 0},
            }
        )
        assert config.plugin_paths.extensions == "/srv/plugins"
        assert config.plugin_group_components["Geo"] is False

    @pytest.mark.parametrize("raw", ["0", "", "off", "False", "no", 0, None])
    def test_group_switch_off_values(self, raw):
        config = GlobalConfig.model_validate({"plugin_group_components": {"Client": raw}})
        assert config.plugin_group_components == {"Client": False}

    @pytest.mark.parametrize("raw", ["1", "on", "yes", "true", 1, True])
    def test_group_switch_on_values(self, raw):
        config = GlobalConfig.model_validate({"plugin_group_components": {"Client": raw}})
        assert config.plugin_group_components == {"Client": True}


class TestDeliveryData:
    def test_keeps_extra_fields(self):
        data = DeliveryData.model_validate({"creative_id": 42, "zone_id": 7, "timestamp": 5})
        assert data.model_extra == {"timestamp": 5}
        assert data.model_dump()["timestamp"] == 5

    def test_fields_optional(self):
        data = DeliveryData()
        assert data.interval_start is None
        assert data.creative_id is None
        assert data.model_fields_set == set()

    def test_values_not_coerced(self):
        data = DeliveryData(creative_id="42", zone_id=7.0)
        assert data.creative_id == "42"
        assert isinstance(data.zone_id, float)
        assert data.model_dump(exclude_unset=True) == {"creative_id": "42", "zone_id": 7.0}

"""Tests for configuration loading, saving and precedence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from adcomponents.config import (
    BUNDLED_PLUGINS_DIR,
    get_config_dir,
    load_global_config,
    load_project_config,
    resolve_config,
    resolve_plugins_root,
    save_global_config,
)
from adcomponents.exceptions import ConfigError
from adcomponents.models import GlobalConfig, PluginPathsConfig


class TestConfigDirs:
    def test_config_dir_under_xdg(self, isolated_config):
        path = get_config_dir()
        assert path == isolated_config / "config" / "adcomponents"
        assert path.is_dir()


class TestGlobalConfig:
    def test_missing_file_gives_defaults(self, isolated_config):
        assert load_global_config() == GlobalConfig()

    def test_save_and_load(self, isolated_config):
        config = GlobalConfig(
            plugin_paths=PluginPathsConfig(extensions="/srv/plugins"),
            plugin_group_components={"Client": True},
        )
        save_global_config(config)
        assert load_global_config() == config

    def test_save_leaves_no_temp_files(self, isolated_config):
        save_global_config(GlobalConfig())
        names = [p.name for p in get_config_dir().iterdir()]
        assert names == ["config.json"]

    def test_invalid_json_raises(self, isolated_config):
        (get_config_dir() / "config.json").write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()


class TestProjectConfig:
    def test_absent(self, isolated_config):
        assert load_project_config() is None

    def test_not_an_object(self, isolated_config):
        (isolated_config / "adcomponents.json").write_text("[1, 2]")
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()

    def test_invalid_json(self, isolated_config):
        (isolated_config / "adcomponents.json").write_text("{")
        with pytest.raises(ConfigError):
            load_project_config()


class TestResolveConfig:
    def test_defaults(self, isolated_config):
        assert resolve_config() == GlobalConfig()

    def test_project_overrides_global(self, isolated_config):
        save_global_config(
            GlobalConfig(
                plugin_paths=PluginPathsConfig(extensions="/global"),
                plugin_group_components={"Client": True, "Geo": True},
            )
        )
        (isolated_config / "adcomponents.json").write_text(
            json.dumps(
                {
                    "plugin_paths": {"extensions": "/project"},
                    "plugin_group_components": {"Geo": False},
                }
            )
        )
        config = resolve_config()
        assert config.plugin_paths.extensions == "/project"
        assert config.plugin_group_components == {"Client": True, "Geo": False}

    def test_env_overrides_project(self, isolated_config, monkeypatch):
        (isolated_config / "adcomponents.json").write_text(
            json.dumps({"plugin_paths": {"extensions": "/project"}})
        )
        monkeypatch.setenv("ADCOMPONENTS_PLUGINS_ROOT", "/env")
        assert resolve_config().plugin_paths.extensions == "/env"

    def test_cli_overrides_env(self, isolated_config, monkeypatch):
        monkeypatch.setenv("ADCOMPONENTS_PLUGINS_ROOT", "/env")
        assert resolve_config(cli_plugins_root="/cli").plugin_paths.extensions == "/cli"

    def test_invalid_merged_config(self, isolated_config):
        (isolated_config / "adcomponents.json").write_text(
            json.dumps({"output": {"format": ["not", "a", "string"]}})
        )
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()


class TestResolvePluginsRoot:
    def test_unset_uses_bundled_plugins(self):
        assert resolve_plugins_root(GlobalConfig()) == BUNDLED_PLUGINS_DIR
        assert (BUNDLED_PLUGINS_DIR / "deliveryLog" / "ox_click" / "ox_click.py").is_file()

    def test_absolute(self, tmp_path):
        config = GlobalConfig(plugin_paths=PluginPathsConfig(extensions=str(tmp_path)))
        assert resolve_plugins_root(config) == tmp_path

    def test_relative_resolves_against_cwd(self, isolated_config):
        config = GlobalConfig(plugin_paths=PluginPathsConfig(extensions="plugins"))
        assert resolve_plugins_root(config) == Path.cwd() / "plugins"

"""Shared test fixtures for adcomponents.

Provides a throwaway plugins root that tests populate with component files,
a manager wired to it with a collecting error reporter, isolated config
directories, and output state management.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Optional

import pytest

from adcomponents.components import CollectingErrorReporter, ComponentManager
from adcomponents.models import ComponentDescriptor, GlobalConfig, PluginPathsConfig
from adcomponents.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches sys.stdout/sys.stderr at creation time; the
    CliRunner swaps those streams, so a stale manager would write to closed
    files in later tests.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Plugin tree fixtures
# ---------------------------------------------------------------------------


class PluginTree:
    """Writes component files below a plugins root."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def write(self, relative: str, source: str) -> Path:
        """Write *source* (dedented) to ``root/relative``."""
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    def add_component(
        self,
        extension: str,
        group: str,
        component: Optional[str] = None,
        body: str = "pass",
        base: str = "Component",
        class_name: Optional[str] = None,
    ) -> Path:
        """Write a component file defining the conventionally named class."""
        component = group if component is None else component
        descriptor = ComponentDescriptor(extension=extension, group=group, component=component)
        name = class_name or descriptor.class_name
        relative = f"{extension}/{group}/{component}.py" if group else f"{extension}/{component}.py"
        body_lines = textwrap.indent(textwrap.dedent(body).strip("\n"), "    ")
        source = (
            "from adcomponents.components.base import Component, HookType, MaintenanceComponent\n"
            "\n"
            "\n"
            f"class {name}({base}):\n"
            f"{body_lines}\n"
        )
        return self.write(relative, source)


@pytest.fixture
def plugin_tree(tmp_path: Path) -> PluginTree:
    """An empty plugins root under tmp_path."""
    return PluginTree(tmp_path / "plugins")


@pytest.fixture
def config(plugin_tree: PluginTree) -> GlobalConfig:
    """Configuration pointing at the temporary plugins root."""
    return GlobalConfig(plugin_paths=PluginPathsConfig(extensions=str(plugin_tree.root)))


@pytest.fixture
def reporter() -> CollectingErrorReporter:
    return CollectingErrorReporter()


@pytest.fixture
def manager(config: GlobalConfig, reporter: CollectingErrorReporter) -> ComponentManager:
    """A ComponentManager over the temporary plugins root."""
    return ComponentManager(config, reporter=reporter)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points the XDG directories at tmp_path, clears ADCOMPONENTS_* variables
    and changes the working directory to tmp_path.
    """
    monkeypatch.setattr("adcomponents.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("ADCOMPONENTS_PLUGINS_ROOT", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN OutputManager for the duration of a test."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()

"""Shared test fixtures for plugin-registry.

Fixtures defined here are available to all tests in the suite without
needing an explicit import.  The ``registry`` fixture builds plugin
directory trees under ``tmp_path``.
"""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


class RegistryBuilder:
    """Writes a ``plugins/<type>/<group>/<plugin>`` tree for a test."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.plugins_root = root / "plugins"
        self.plugins_root.mkdir(parents=True, exist_ok=True)

    def plugin(
        self,
        plugin_id: str,
        versions: str | None = None,
        *,
        type: str = "server",
        group: str = "io.example",
        manifests: dict[str, str] | None = None,
        module_dirs: dict[str, list[str]] | None = None,
        ignore: bool = False,
    ) -> Path:
        """Create a plugin directory and return it.

        ``versions`` and the ``manifests`` values are YAML text; manifests
        and module directories are keyed by version directory name.
        """
        plugin_dir = self.plugins_root / type / group / plugin_id
        plugin_dir.mkdir(parents=True, exist_ok=True)
        if versions is not None:
            (plugin_dir / "versions.yaml").write_text(textwrap.dedent(versions), encoding="utf-8")
        for range_name, manifest in (manifests or {}).items():
            version_dir = plugin_dir / range_name
            version_dir.mkdir(parents=True, exist_ok=True)
            (version_dir / "manifest.yaml").write_text(textwrap.dedent(manifest), encoding="utf-8")
        for range_name, modules in (module_dirs or {}).items():
            for module in modules:
                (plugin_dir / range_name / module).mkdir(parents=True, exist_ok=True)
        if ignore:
            (plugin_dir / "ignore").write_text("", encoding="utf-8")
        return plugin_dir

    def variables(self, text: str) -> None:
        (self.plugins_root / "variables.yaml").write_text(textwrap.dedent(text), encoding="utf-8")


@pytest.fixture()
def registry(tmp_path: Path) -> RegistryBuilder:
    """Return a builder for an empty registry checkout rooted at ``tmp_path``."""
    return RegistryBuilder(tmp_path)


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"

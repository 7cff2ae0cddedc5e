"""Enumerate every (type, plugin, release) combination of a registry.

Combinations are yielded lazily so that callers can filter plugins
before any of their declaration files are read.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from pluginreg.core.errors import DuplicatePlugin
from pluginreg.core.modules import ProjectModule
from pluginreg.core.settings import DEFAULT_SETTINGS, RegistrySettings
from pluginreg.manifest.reader import module_references
from pluginreg.resolver.models import PluginConfigurationStub
from pluginreg.versions.release import Release

logger = logging.getLogger(__name__)


def plugin_directories(
    plugins_root: Path,
    settings: RegistrySettings = DEFAULT_SETTINGS,
) -> Iterator[tuple[str, Path]]:
    """Yield ``(type, plugin_dir)`` for every plugin that is not ignored.

    Plugin directories sit two levels below each type directory
    (``<type>/<group>/<plugin>``) and are visited in sorted order.

    Raises
    ------
    DuplicatePlugin
        As soon as a plugin id is seen for the second time, under any type.
    """
    seen: dict[str, Path] = {}
    for plugin_type in settings.types:
        for plugin_dir in sorted(p for p in (plugins_root / plugin_type).glob("*/*") if p.is_dir()):
            if (plugin_dir / settings.ignore_marker).exists():
                logger.debug("Skipping ignored plugin %s", plugin_dir)
                continue
            previous = seen.get(plugin_dir.name)
            if previous is not None:
                raise DuplicatePlugin(previous, plugin_dir)
            seen[plugin_dir.name] = plugin_dir
            yield plugin_type, plugin_dir


def applicable_modules(plugin_dir: Path, plugin_type: str) -> tuple[ProjectModule, ...]:
    """Return the modules declared by ``plugin_dir`` plus its base type."""
    names: list[str] = []
    for name in [*module_references(plugin_dir), plugin_type]:
        if name not in names:
            names.append(name)
    return tuple(ProjectModule.parse(name) for name in names)


def enumerate_combinations(
    plugins_root: Path,
    releases: Sequence[Release],
    settings: RegistrySettings = DEFAULT_SETTINGS,
) -> Iterator[PluginConfigurationStub]:
    """Yield one stub per (type, plugin, release) combination.

    Parameters
    ----------
    plugins_root:
        The ``plugins`` directory.
    releases:
        Target releases; each plugin yields one stub per release, in order.
    settings:
        On-disk naming conventions.
    """
    for plugin_type, plugin_dir in plugin_directories(plugins_root, settings):
        modules = applicable_modules(plugin_dir, plugin_type)
        for release in releases:
            yield PluginConfigurationStub(plugin_type, release, plugin_dir, modules)

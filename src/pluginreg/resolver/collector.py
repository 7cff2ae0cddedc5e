"""Collect every plugin/release/module configuration of a registry."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from pathlib import Path

from pluginreg.core.settings import DEFAULT_SETTINGS, RegistrySettings
from pluginreg.manifest.reader import read_registry_variables
from pluginreg.resolver.enumerator import enumerate_combinations
from pluginreg.resolver.models import PluginConfiguration
from pluginreg.resolver.ordering import sort_roots_first
from pluginreg.resolver.resolver import resolve_plugin
from pluginreg.versions.release import Release

logger = logging.getLogger(__name__)

NameFilter = Callable[[str], bool]


def iter_plugin_configs(
    releases: Sequence[Release],
    plugins_root: Path,
    name_filter: NameFilter | None = None,
    settings: RegistrySettings = DEFAULT_SETTINGS,
) -> Iterator[PluginConfiguration]:
    """Lazily resolve every combination whose plugin name passes ``name_filter``.

    Plugins rejected by the filter are never read.  Failures are logged
    with the plugin directory and re-raised.
    """
    version_variables = read_registry_variables(plugins_root, settings)
    for stub in enumerate_combinations(plugins_root, releases, settings):
        if name_filter is not None and not name_filter(stub.plugin_id):
            continue
        try:
            configs = list(
                resolve_plugin(
                    plugins_root,
                    stub.type,
                    stub.modules,
                    stub.release,
                    stub.plugin_dir,
                    version_variables,
                    settings,
                )
            )
        except Exception as exc:
            logger.error("Failed to read plugin %s: %s", stub.plugin_dir, exc)
            raise
        yield from configs


def collect_plugin_configs(
    releases: Iterable[str],
    root: str | Path = ".",
    name_filter: NameFilter | None = None,
    settings: RegistrySettings = DEFAULT_SETTINGS,
) -> list[PluginConfiguration]:
    """Resolve all plugin configurations of the registry checked out at ``root``.

    Parameters
    ----------
    releases:
        Target host framework releases, e.g. ``["2.3.12", "3.0.0"]``.
    root:
        Checkout root; plugins are read from ``<root>/<settings.plugins_dir>``.
    name_filter:
        Predicate on plugin directory names; ``None`` keeps every plugin.
    settings:
        On-disk naming conventions.

    Returns
    -------
    list[PluginConfiguration]
        Every configuration, configurations without a parent first.

    Raises
    ------
    pluginreg.core.errors.RegistryError
        On the first malformed or inconsistent plugin.
    """
    logger.info("Reading plugin configurations...")
    parsed_releases = [Release.parse(text) for text in releases]
    plugins_root = Path(root) / settings.plugins_dir
    configs = sort_roots_first(
        iter_plugin_configs(parsed_releases, plugins_root, name_filter, settings)
    )
    logger.info("%d plugin configurations found", len(configs))
    return configs

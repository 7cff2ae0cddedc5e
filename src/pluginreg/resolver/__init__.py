"""Configuration resolution engine.

Exports the enumeration, resolution and ordering steps together with
the ``collect_plugin_configs`` entry point that chains them.
"""
from __future__ import annotations

from pluginreg.resolver.collector import collect_plugin_configs, iter_plugin_configs
from pluginreg.resolver.enumerator import (
    applicable_modules,
    enumerate_combinations,
    plugin_directories,
)
from pluginreg.resolver.models import PluginConfiguration, PluginConfigurationStub
from pluginreg.resolver.ordering import latest_by_path, sort_roots_first
from pluginreg.resolver.resolver import resolve_plugin, select_version_range

__all__ = [
    "PluginConfiguration",
    "PluginConfigurationStub",
    "applicable_modules",
    "collect_plugin_configs",
    "enumerate_combinations",
    "iter_plugin_configs",
    "latest_by_path",
    "plugin_directories",
    "resolve_plugin",
    "select_version_range",
    "sort_roots_first",
]

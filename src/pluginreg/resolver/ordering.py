"""Ordering and reduction of resolved configuration lists."""
from __future__ import annotations

from collections.abc import Iterable

from pluginreg.resolver.models import PluginConfiguration
from pluginreg.versions.release import Release


def sort_roots_first(configs: Iterable[PluginConfiguration]) -> list[PluginConfiguration]:
    """Stable-sort ``configs`` so that every parent precedes its dependents.

    Configurations without a parent come first; the rest are ordered by
    their depth in the parent chain, then by parent key.  With one level
    of parents this is a plain sort on the parent key.

    Consumers process the list sequentially and expect a referenced
    parent to have been emitted already.
    """
    configs = list(configs)
    by_key = {config.key: config for config in configs}
    depths: dict[str, int] = {}

    def depth(config: PluginConfiguration) -> int:
        if config.parent is None:
            return 0
        if config.key not in depths:
            parent = by_key.get(config.parent)
            # parent chains follow the static module table, so they are finite
            depths[config.key] = 1 if parent is None else 1 + depth(parent)
        return depths[config.key]

    return sorted(configs, key=lambda c: (depth(c), c.parent or ""))


def latest_by_path(configs: Iterable[PluginConfiguration]) -> list[PluginConfiguration]:
    """Keep, for every distinct path, the configuration with the latest release.

    Used for resolving and compiling, where only one configuration per
    source directory is wanted.
    """
    latest: dict[str, tuple[Release, PluginConfiguration]] = {}
    for config in configs:
        release = Release.parse(config.release)
        current = latest.get(config.path)
        if current is None or release > current[0]:
            latest[config.path] = (release, config)
    return [config for _, config in latest.values()]

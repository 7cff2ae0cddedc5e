"""plugin-registry — resolve plugin build configurations across framework releases.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import pluginreg

    # Resolve every plugin of the checkout in the current directory
    configs = pluginreg.collect(["2.3.12", "3.0.0"])

    # Only plugins whose directory name starts with "auth"
    configs = pluginreg.collect(["3.0.0"], name_filter=lambda n: n.startswith("auth"))

    # One configuration per source directory, at its latest release
    latest = pluginreg.latest_by_path(configs)

    pluginreg.__version__
    '0.1.0'
"""
from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from pluginreg.core.settings import RegistrySettings
    from pluginreg.resolver.models import PluginConfiguration


def collect(
    releases: Iterable[str],
    root: str | Path = ".",
    name_filter: Callable[[str], bool] | None = None,
    settings: "RegistrySettings | None" = None,
) -> list["PluginConfiguration"]:
    """Resolve all plugin configurations of the registry at ``root``.

    Parameters
    ----------
    releases:
        Target release identifiers.
    root:
        Checkout root containing the ``plugins`` directory.
    name_filter:
        Predicate on plugin directory names.
    settings:
        On-disk naming conventions; defaults to the standard layout.

    Returns
    -------
    list[PluginConfiguration]
        Every configuration, configurations without a parent first.

    Raises
    ------
    pluginreg.core.errors.RegistryError
        If any plugin is malformed.
    """
    from pluginreg.core.settings import DEFAULT_SETTINGS
    from pluginreg.resolver.collector import collect_plugin_configs

    return collect_plugin_configs(releases, root, name_filter, settings or DEFAULT_SETTINGS)


def latest_by_path(configs: Iterable["PluginConfiguration"]) -> list["PluginConfiguration"]:
    """Keep one configuration per path, the one with the latest release."""
    from pluginreg.resolver.ordering import latest_by_path as _latest_by_path

    return _latest_by_path(configs)


def sort_roots_first(configs: Iterable["PluginConfiguration"]) -> list["PluginConfiguration"]:
    """Order ``configs`` so that configurations without a parent come first."""
    from pluginreg.resolver.ordering import sort_roots_first as _sort_roots_first

    return _sort_roots_first(configs)


__all__ = [
    "__version__",
    "collect",
    "latest_by_path",
    "sort_roots_first",
]

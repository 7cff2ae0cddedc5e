"""On-disk naming conventions of a plugin registry checkout."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RegistrySettings:
    """File and directory names used when scanning a registry.

    The defaults describe the standard layout::

        <root>/plugins/variables.yaml
        <root>/plugins/<type>/<group>/<plugin>/versions.yaml
        <root>/plugins/<type>/<group>/<plugin>/ignore
        <root>/plugins/<type>/<group>/<plugin>/<range>/manifest.yaml
        <root>/plugins/<type>/<group>/<plugin>/<range>/<module>/

    Parameters
    ----------
    plugins_dir:
        Directory below the root that holds every plugin.
    versions_file:
        Per-plugin dependency declaration file.
    manifest_file:
        Per-version-range manifest file.
    ignore_marker:
        File whose presence excludes a plugin from the scan.
    variables_file:
        Registry-wide version variables, directly under ``plugins_dir``.
    types:
        Distribution types scanned, in order.
    """

    plugins_dir: str = "plugins"
    versions_file: str = "versions.yaml"
    manifest_file: str = "manifest.yaml"
    ignore_marker: str = "ignore"
    variables_file: str = "variables.yaml"
    types: tuple[str, ...] = ("server", "client")


DEFAULT_SETTINGS = RegistrySettings()

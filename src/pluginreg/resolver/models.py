"""Records produced by enumeration and resolution."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pluginreg.artifacts.reference import ArtifactReference
from pluginreg.core.modules import ProjectModule
from pluginreg.versions.release import Release


@dataclass(frozen=True)
class PluginConfigurationStub:
    """One (type, release, plugin) combination awaiting resolution."""

    type: str
    release: Release
    plugin_dir: Path
    modules: tuple[ProjectModule, ...]

    @property
    def plugin_id(self) -> str:
        return self.plugin_dir.name


@dataclass(frozen=True)
class PluginConfiguration:
    """A fully resolved plugin build configuration.

    Parameters
    ----------
    path:
        Source directory relative to the plugins root, with ``/`` separators.
    plugin_id:
        Name of the plugin directory.
    type:
        Distribution type the plugin was found under (``server`` or ``client``).
    release:
        The host framework release this configuration targets.
    module:
        The module this configuration builds.
    version_range:
        Safe name of the version range that matched ``release``.
    artifacts:
        Required artifacts with every placeholder version substituted.
        Duplicates coming from prerequisites are kept.
    repositories:
        Extra artifact registry URLs from the manifest.
    parent:
        Key of the configuration this one extends, or ``None``.
    """

    path: str
    plugin_id: str
    type: str
    release: str
    module: ProjectModule
    version_range: str
    artifacts: tuple[ArtifactReference, ...]
    repositories: tuple[str, ...]
    parent: str | None = None

    @property
    def key(self) -> str:
        """Identity referenced by other configurations' ``parent``."""
        return configuration_key(self.plugin_id, self.module, self.release)


def configuration_key(plugin_id: str, module: ProjectModule, release: Release | str) -> str:
    """Build the ``<pluginId>.<module>.<release>`` key."""
    return f"{plugin_id}.{module}.{release}"

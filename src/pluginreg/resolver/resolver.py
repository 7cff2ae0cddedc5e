"""Resolve one plugin at one release into its build configurations.

For a (plugin, release) pair the resolver:

1. reads the plugin's version range -> artifacts declaration;
2. picks the *last* declared range that contains the release, so later
   declarations win when ranges overlap;
3. reads the manifest of that range's directory;
4. recursively resolves every prerequisite plugin at the same release;
5. merges, per applicable module, the plugin's own artifacts with the
   artifacts of the last prerequisite that resolved that module, and
   substitutes the release placeholder;
6. yields one :class:`PluginConfiguration` per applicable module.

Any error aborts the plugin; nothing partial is ever yielded.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path

from pluginreg.artifacts.reference import ArtifactReference
from pluginreg.core.errors import CyclicPrerequisite, MissingPrerequisite
from pluginreg.core.modules import MODULE_PARENTS, ProjectModule
from pluginreg.core.settings import DEFAULT_SETTINGS, RegistrySettings
from pluginreg.manifest.reader import (
    read_manifest,
    read_version_variables,
    read_versioned_artifacts,
)
from pluginreg.resolver.models import PluginConfiguration, configuration_key
from pluginreg.tree.loader import load_tree
from pluginreg.versions.release import Release, VersionRange

logger = logging.getLogger(__name__)


def select_version_range(
    artifacts_by_range: Mapping[VersionRange, list[ArtifactReference]],
    release: Release,
) -> tuple[VersionRange, list[ArtifactReference]] | None:
    """Return the last declared entry whose range contains ``release``.

    Ranges may overlap; the later declaration takes priority.
    """
    selected = None
    for version_range, artifacts in artifacts_by_range.items():
        if version_range.contains(release):
            selected = (version_range, artifacts)
    return selected


def find_plugin_dir(plugins_root: Path, plugin_type: str, plugin_id: str) -> Path | None:
    """Locate ``<type>/<any group>/<plugin_id>`` below ``plugins_root``."""
    type_dir = plugins_root / plugin_type
    if not type_dir.is_dir():
        return None
    for group_dir in sorted(type_dir.iterdir()):
        candidate = group_dir / plugin_id
        if candidate.is_dir():
            return candidate
    return None


def filter_module_artifacts(
    artifacts: Sequence[ArtifactReference],
    module: ProjectModule,
    plugin_type: str,
) -> list[ArtifactReference]:
    """Keep artifacts for ``module``; untagged ones belong to the base type."""
    return [
        artifact
        for artifact in artifacts
        if artifact.module == module or (artifact.module is None and module.value == plugin_type)
    ]


def parent_key(
    plugin_id: str,
    module: ProjectModule,
    modules: Sequence[ProjectModule],
    release: Release,
) -> str | None:
    """Key of the configuration ``module`` extends, if its parent applies."""
    parent = MODULE_PARENTS.get(module)
    if parent is None or parent not in modules:
        return None
    return configuration_key(plugin_id, parent, release)


def resolve_plugin(
    plugins_root: Path,
    plugin_type: str,
    modules: Sequence[ProjectModule],
    release: Release,
    plugin_dir: Path,
    version_variables: Mapping[str, str] | None = None,
    settings: RegistrySettings = DEFAULT_SETTINGS,
    visiting: tuple[str, ...] = (),
) -> Iterator[PluginConfiguration]:
    """Yield the configurations of ``plugin_dir`` at ``release``.

    Parameters
    ----------
    plugins_root:
        The ``plugins`` directory; configuration paths are relative to it.
    plugin_type:
        Distribution type the plugin is resolved as.
    modules:
        Applicable modules, one configuration is yielded per module.
    release:
        Release under resolution.
    plugin_dir:
        ``<type>/<group>/<plugin>`` directory.
    version_variables:
        Registry-wide version variables; the plugin's own override them.
    settings:
        On-disk naming conventions.
    visiting:
        Plugin ids on the current prerequisite path, outermost first.

    Raises
    ------
    MissingPrerequisite
        If a prerequisite id has no plugin directory under ``plugin_type``.
    CyclicPrerequisite
        If a prerequisite is already being resolved further up the path.
    """
    plugin_id = plugin_dir.name
    group_id = plugin_dir.parent.name
    path = (*visiting, plugin_id)

    declarations = load_tree(plugin_dir / settings.versions_file)
    if declarations is None:
        return
    local_variables = read_version_variables(declarations, version_variables)
    artifacts_by_range = read_versioned_artifacts(declarations, group_id, plugin_id, local_variables)

    selected = select_version_range(artifacts_by_range, release)
    if selected is None:
        logger.debug("No version range of %s contains %s", plugin_id, release)
        return
    version_range, artifacts = selected
    logger.debug("Resolving %s %s with range %s", plugin_id, release, version_range.safe_name)

    source_dir = plugin_dir / version_range.safe_name
    manifest = read_manifest(source_dir, settings)

    prerequisite_artifacts: dict[ProjectModule, list[ArtifactReference]] = {}
    for prerequisite_id in manifest.prerequisites:
        if prerequisite_id in path:
            raise CyclicPrerequisite((*path, prerequisite_id))
        prerequisite_dir = find_plugin_dir(plugins_root, plugin_type, prerequisite_id)
        if prerequisite_dir is None:
            raise MissingPrerequisite(plugin_id, prerequisite_id)
        for config in resolve_plugin(
            plugins_root,
            plugin_type,
            modules,
            release,
            prerequisite_dir,
            version_variables,
            settings,
            path,
        ):
            # one list per module: a later prerequisite replaces an earlier one
            prerequisite_artifacts[config.module] = list(config.artifacts)

    for module in modules:
        required = [
            artifact.resolve(release)
            for artifact in (
                *filter_module_artifacts(artifacts, module, plugin_type),
                *prerequisite_artifacts.get(module, ()),
            )
        ]
        module_dir = source_dir / module.value if len(modules) > 1 else source_dir
        yield PluginConfiguration(
            path=module_dir.relative_to(plugins_root).as_posix(),
            plugin_id=plugin_id,
            type=plugin_type,
            release=str(release),
            module=module,
            version_range=version_range.safe_name,
            artifacts=tuple(required),
            repositories=manifest.repositories,
            parent=parent_key(plugin_id, module, modules, release),
        )

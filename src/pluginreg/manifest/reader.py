"""Read plugin dependency declarations and version manifests.

A dependency declaration (``versions.yaml``) maps version ranges to the
artifacts a plugin needs; plain-identifier keys declare version
variables instead::

    rpc-version: 0.4.0
    "[2.0,3.0)":
      - io.example:example-server
    "[3.0,)":
      server:
        - io.example:example-server
        - org.example.rpc:rpc-server:$rpc-version
      client:
        - alias: rpc
          dependency: org.example.rpc:rpc-client:$rpc-version

A manifest (``manifest.yaml``) lives in each version directory::

    prerequisites:
      - serialization
    gradle:
      repositories:
        - url: https://maven.example.org/releases
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from pluginreg.artifacts.reference import ArtifactReference
from pluginreg.core.errors import MalformedArtifactDeclaration, MalformedVersionRange
from pluginreg.core.modules import ProjectModule
from pluginreg.core.settings import DEFAULT_SETTINGS, RegistrySettings
from pluginreg.tree.loader import load_tree
from pluginreg.tree.nodes import ConfigNode, ListNode, MapNode, ScalarNode
from pluginreg.versions.release import VersionRange

logger = logging.getLogger(__name__)

PLAIN_IDENTIFIER: Final[re.Pattern[str]] = re.compile(r"^[\w-]+$")


@dataclass(frozen=True)
class PluginManifest:
    """Metadata of one plugin version directory.

    Parameters
    ----------
    prerequisites:
        Ids of plugins whose artifacts are merged into this one, in order.
    repositories:
        Extra artifact registry URLs, in order.
    """

    prerequisites: tuple[str, ...] = field(default=())
    repositories: tuple[str, ...] = field(default=())


EMPTY_MANIFEST: Final[PluginManifest] = PluginManifest()


def is_plain_identifier(key: str) -> bool:
    """Return ``True`` for keys that name variables rather than ranges."""
    return PLAIN_IDENTIFIER.match(key) is not None


# ---------------------------------------------------------------------------
# Version variables
# ---------------------------------------------------------------------------


def read_version_variables(
    tree: MapNode | None, inherited: Mapping[str, str] | None = None
) -> dict[str, str]:
    """Collect the version variables declared by plain-identifier keys.

    Plain-identifier keys holding a list or map are not variables and are
    skipped.

    Parameters
    ----------
    tree:
        A declaration or variables tree; ``None`` contributes nothing.
    inherited:
        Variables already in scope.  Keys in ``tree`` override them.
    """
    variables = dict(inherited or {})
    if tree is None:
        return variables
    for key, node in tree:
        if not is_plain_identifier(key):
            continue
        if not isinstance(node, ScalarNode):
            logger.debug("Skipping non-scalar key %r in %s", key, tree.source)
            continue
        variables[key] = node.content
    return variables


def read_registry_variables(
    plugins_root: Path, settings: RegistrySettings = DEFAULT_SETTINGS
) -> dict[str, str]:
    """Read the registry-wide version variables file, if present."""
    tree = load_tree(plugins_root / settings.variables_file)
    variables = read_version_variables(tree)
    if variables:
        logger.debug("Loaded %d registry version variable(s)", len(variables))
    return variables


# ---------------------------------------------------------------------------
# Artifact declarations
# ---------------------------------------------------------------------------


def read_versioned_artifacts(
    tree: MapNode,
    group_id: str,
    plugin_id: str,
    version_variables: Mapping[str, str],
) -> dict[VersionRange, list[ArtifactReference]]:
    """Map every declared version range to its artifact list.

    Declaration order is preserved.  If two keys spell the same interval
    the later one replaces the earlier and takes its position at the end.

    Raises
    ------
    MalformedVersionRange
        If a non-identifier key is not a valid range; the error names
        ``plugin_id``.
    MalformedArtifactDeclaration
        If an artifact node is malformed.
    """
    artifacts_by_range: dict[VersionRange, list[ArtifactReference]] = {}
    for key, node in tree:
        if is_plain_identifier(key):
            continue
        try:
            version_range = VersionRange.parse(key)
        except MalformedVersionRange as exc:
            raise exc.with_plugin(plugin_id) from exc
        try:
            artifacts = read_artifact_list(node, group_id, version_variables)
        except MalformedArtifactDeclaration as exc:
            raise MalformedArtifactDeclaration(
                f"{exc} (plugin {plugin_id}, range {key!r})", value=exc.value
            ) from exc
        artifacts_by_range.pop(version_range, None)
        artifacts_by_range[version_range] = artifacts
    return artifacts_by_range


def read_artifact_list(
    node: ConfigNode,
    group_id: str,
    version_variables: Mapping[str, str],
) -> list[ArtifactReference]:
    """Interpret ``node`` as a list of artifact references.

    - a scalar is a single coordinate;
    - a list holds coordinates and alias records;
    - a map with an ``alias`` key is a single alias record;
    - any other map goes from module name to a nested artifact list, and
      every artifact below a module key is tagged with that module.
    """
    if isinstance(node, ScalarNode):
        return [_parse_coordinate(node, group_id, version_variables)]
    if isinstance(node, ListNode):
        artifacts: list[ArtifactReference] = []
        for item in node:
            if isinstance(item, ScalarNode):
                artifacts.append(_parse_coordinate(item, group_id, version_variables))
            elif isinstance(item, MapNode):
                artifacts.append(_parse_alias_record(item, group_id, version_variables))
            else:
                raise MalformedArtifactDeclaration(
                    f"Unexpected item type in artifacts list: {item.kind}", value=item
                )
        return artifacts
    if isinstance(node, MapNode):
        if "alias" in node:
            return [_parse_alias_record(node, group_id, version_variables)]
        artifacts = []
        for module_name, module_artifacts in node:
            module = _parse_module(module_name)
            artifacts.extend(
                artifact.with_module(module)
                for artifact in read_artifact_list(module_artifacts, group_id, version_variables)
            )
        return artifacts
    raise MalformedArtifactDeclaration(f"Unexpected node {node!r}", value=node)


def _parse_coordinate(
    node: ScalarNode, group_id: str, version_variables: Mapping[str, str]
) -> ArtifactReference:
    return ArtifactReference.parse(node.content, group_id, version_variables)


def _parse_alias_record(
    node: MapNode, group_id: str, version_variables: Mapping[str, str]
) -> ArtifactReference:
    def find_value(key: str) -> str:
        value = node.get(key)
        if not isinstance(value, ScalarNode):
            raise MalformedArtifactDeclaration(
                f"Dependency with alias must have a {key!r} key", value=node
            )
        return value.content

    return ArtifactReference.parse(
        find_value("dependency"),
        group_id,
        version_variables,
        alias=find_value("alias"),
    )


def _parse_module(name: str) -> ProjectModule:
    try:
        return ProjectModule.parse(name)
    except ValueError as exc:
        raise MalformedArtifactDeclaration(str(exc), value=name) from None


# ---------------------------------------------------------------------------
# Manifests and module directories
# ---------------------------------------------------------------------------


def read_manifest(
    version_dir: Path, settings: RegistrySettings = DEFAULT_SETTINGS
) -> PluginManifest:
    """Read the manifest of a version directory.

    A missing manifest yields an empty manifest rather than an error.
    """
    tree = load_tree(version_dir / settings.manifest_file)
    if tree is None:
        return EMPTY_MANIFEST

    prerequisites_node = tree.get_list("prerequisites")
    prerequisites = (
        tuple(item.as_scalar().content for item in prerequisites_node)
        if prerequisites_node is not None
        else ()
    )

    repositories: list[str] = []
    gradle = tree.get_map("gradle")
    repository_list = gradle.get_list("repositories") if gradle is not None else None
    for item in repository_list or ():
        url = item.as_map().get_scalar("url")
        if url is not None:
            repositories.append(url.content)

    return PluginManifest(prerequisites, tuple(repositories))


def module_references(plugin_dir: Path) -> list[str]:
    """Return module names found as sub-directories of the version directories.

    Names are de-duplicated and returned in sorted path order.
    """
    names: list[str] = []
    valid = ProjectModule.names()
    for candidate in sorted(plugin_dir.glob("*/*")):
        if candidate.is_dir() and candidate.name in valid and candidate.name not in names:
            names.append(candidate.name)
    return names

"""Dependency declaration and manifest readers."""
from __future__ import annotations

from pluginreg.manifest.reader import (
    EMPTY_MANIFEST,
    PluginManifest,
    is_plain_identifier,
    module_references,
    read_artifact_list,
    read_manifest,
    read_registry_variables,
    read_version_variables,
    read_versioned_artifacts,
)

__all__ = [
    "EMPTY_MANIFEST",
    "PluginManifest",
    "is_plain_identifier",
    "module_references",
    "read_artifact_list",
    "read_manifest",
    "read_registry_variables",
    "read_version_variables",
    "read_versioned_artifacts",
]

"""Serialization of resolved configurations to JSON and YAML.

The serialized form is a list of plain dicts whose keys are the field
names downstream build generators expect::

    {
      "path": "server/io.example/auth/[2.0,)",
      "pluginId": "auth",
      "type": "server",
      "release": "2.3.0",
      "module": "server",
      "versionRange": "[2.0,)",
      "artifacts": [{"coordinate": "io.example:auth:2.3.0", "alias": null}],
      "repositories": [],
      "parent": null
    }

Usage
-----
::

    from pluginreg.export import ConfigurationSerializer

    serializer = ConfigurationSerializer()
    text = serializer.to_json(configs)
    assert serializer.from_json(text) == configs
"""
from __future__ import annotations

import json

import yaml

from pluginreg.artifacts.reference import ArtifactReference
from pluginreg.core.errors import UnexpectedConfigurationShape
from pluginreg.core.modules import ProjectModule
from pluginreg.resolver.models import PluginConfiguration


class ConfigurationSerializer:
    """Converts between :class:`PluginConfiguration` lists and plain data."""

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self, config: PluginConfiguration) -> dict[str, object]:
        return {
            "path": config.path,
            "pluginId": config.plugin_id,
            "type": config.type,
            "release": config.release,
            "module": config.module.value,
            "versionRange": config.version_range,
            "artifacts": [self._artifact_to_dict(a) for a in config.artifacts],
            "repositories": list(config.repositories),
            "parent": config.parent,
        }

    def _artifact_to_dict(self, artifact: ArtifactReference) -> dict[str, object]:
        return {
            "coordinate": artifact.coordinate,
            "alias": artifact.alias,
            "module": artifact.module.value if artifact.module else None,
        }

    def to_list(self, configs: list[PluginConfiguration]) -> list[dict[str, object]]:
        return [self.to_dict(c) for c in configs]

    def to_json(self, configs: list[PluginConfiguration], indent: int | None = 2) -> str:
        """Serialize ``configs`` to a JSON array."""
        return json.dumps(self.to_list(configs), indent=indent)

    def to_yaml(self, configs: list[PluginConfiguration]) -> str:
        """Serialize ``configs`` to a YAML sequence."""
        return yaml.safe_dump(self.to_list(configs), default_flow_style=False, sort_keys=False)

    # ------------------------------------------------------------------
    # Deserialization
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, object]) -> PluginConfiguration:
        """Rebuild a configuration from :meth:`to_dict` output.

        Raises
        ------
        UnexpectedConfigurationShape
            If a required key is missing or has the wrong type.
        """
        try:
            artifacts = tuple(
                self._artifact_from_dict(a) for a in data["artifacts"]  # type: ignore[union-attr]
            )
            return PluginConfiguration(
                path=str(data["path"]),
                plugin_id=str(data["pluginId"]),
                type=str(data["type"]),
                release=str(data["release"]),
                module=ProjectModule(data["module"]),
                version_range=str(data["versionRange"]),
                artifacts=artifacts,
                repositories=tuple(data["repositories"]),  # type: ignore[arg-type]
                parent=data["parent"] if data.get("parent") is not None else None,  # type: ignore[arg-type]
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UnexpectedConfigurationShape(f"invalid configuration record: {exc}") from exc

    def _artifact_from_dict(self, data: dict[str, object]) -> ArtifactReference:
        group_id, artifact_id, version = str(data["coordinate"]).split(":")
        module = data.get("module")
        return ArtifactReference(
            group_id,
            artifact_id,
            version,
            alias=data.get("alias"),  # type: ignore[arg-type]
            module=ProjectModule(module) if module else None,
        )

    def from_list(self, data: list[dict[str, object]]) -> list[PluginConfiguration]:
        return [self.from_dict(d) for d in data]

    def from_json(self, text: str) -> list[PluginConfiguration]:
        return self.from_list(json.loads(text))

    def from_yaml(self, text: str) -> list[PluginConfiguration]:
        return self.from_list(yaml.safe_load(text) or [])

"""Unit tests for pluginreg.manifest — declarations, variables, manifests."""
from __future__ import annotations

from pathlib import Path

import pytest

from pluginreg.artifacts import RELEASE
from pluginreg.core.errors import (
    MalformedArtifactDeclaration,
    MalformedVersionRange,
    UnexpectedConfigurationShape,
)
from pluginreg.core.modules import ProjectModule
from pluginreg.manifest import (
    EMPTY_MANIFEST,
    is_plain_identifier,
    module_references,
    read_artifact_list,
    read_manifest,
    read_registry_variables,
    read_version_variables,
    read_versioned_artifacts,
)
from pluginreg.tree import parse_tree
from pluginreg.versions import VersionRange


def _artifacts(yaml_text: str, variables: dict[str, str] | None = None):
    tree = parse_tree(yaml_text)
    return read_artifact_list(tree.get("deps"), "io.example", variables or {})


# ===========================================================================
# Plain identifiers and version variables
# ===========================================================================


class TestVersionVariables:
    @pytest.mark.parametrize("key", ["rpc", "rpc-version", "jvm_version", "3"])
    def test_plain_identifiers(self, key: str) -> None:
        assert is_plain_identifier(key)

    @pytest.mark.parametrize("key", ["[1.0,)", "2.0", "(,3]"])
    def test_ranges_are_not_identifiers(self, key: str) -> None:
        assert not is_plain_identifier(key)

    def test_collects_plain_keys(self) -> None:
        tree = parse_tree('rpc: 0.4.0\n"[1.0,)": a\n')
        assert read_version_variables(tree) == {"rpc": "0.4.0"}

    def test_local_overrides_inherited(self) -> None:
        tree = parse_tree("rpc: 0.5.0\n")
        assert read_version_variables(tree, {"rpc": "0.4.0", "x": "1"}) == {"rpc": "0.5.0", "x": "1"}

    def test_none_tree(self) -> None:
        assert read_version_variables(None, {"a": "1"}) == {"a": "1"}

    def test_non_scalar_plain_key_is_ignored(self) -> None:
        tree = parse_tree('"[1.0,)": g:q\nmeta:\n  owner: someone\nrpc: 0.4.0\n')
        assert read_version_variables(tree) == {"rpc": "0.4.0"}
        assert list(read_versioned_artifacts(tree, "io.example", "q", {})) == [VersionRange.parse("[1.0,)")]

    def test_registry_variables(self, registry) -> None:
        registry.variables("serialization: 1.6.0\n")
        assert read_registry_variables(registry.plugins_root) == {"serialization": "1.6.0"}

    def test_registry_variables_missing(self, tmp_path: Path) -> None:
        assert read_registry_variables(tmp_path) == {}


# ===========================================================================
# read_artifact_list
# ===========================================================================


class TestReadArtifactList:
    def test_scalar(self) -> None:
        [ref] = _artifacts("deps: auth\n")
        assert ref.group_id == "io.example"
        assert ref.artifact_id == "auth"
        assert ref.module is None

    def test_list_of_scalars(self) -> None:
        refs = _artifacts("deps:\n  - g:a\n  - g:b:1.0\n")
        assert [str(r) for r in refs] == ["g:a:{release}", "g:b:1.0"]

    def test_alias_record_in_list(self) -> None:
        refs = _artifacts("deps:\n  - alias: rpc\n    dependency: g:rpc:$v\n", {"v": "0.4"})
        assert refs[0].alias == "rpc"
        assert refs[0].version == "0.4"

    def test_alias_record_as_map(self) -> None:
        [ref] = _artifacts("deps:\n  alias: rpc\n  dependency: g:rpc\n")
        assert ref.alias == "rpc"
        assert ref.version is RELEASE

    def test_alias_record_requires_dependency(self) -> None:
        with pytest.raises(MalformedArtifactDeclaration, match="dependency"):
            _artifacts("deps:\n  alias: rpc\n")

    def test_module_map_tags_artifacts(self) -> None:
        refs = _artifacts(
            "deps:\n"
            "  server:\n"
            "    - g:server-lib\n"
            "  client: g:client-lib\n"
            "  web:\n"
            "    - alias: w\n"
            "      dependency: g:web-lib\n"
        )
        assert [(r.artifact_id, r.module) for r in refs] == [
            ("server-lib", ProjectModule.server),
            ("client-lib", ProjectModule.client),
            ("web-lib", ProjectModule.web),
        ]
        assert refs[2].alias == "w"

    def test_unknown_module(self) -> None:
        with pytest.raises(MalformedArtifactDeclaration, match="desktop"):
            _artifacts("deps:\n  desktop: g:a\n")

    def test_nested_list_rejected(self) -> None:
        with pytest.raises(MalformedArtifactDeclaration, match="Unexpected item type"):
            _artifacts("deps:\n  - - g:a\n")


# ===========================================================================
# read_versioned_artifacts
# ===========================================================================


class TestReadVersionedArtifacts:
    def test_skips_variables_and_keeps_order(self) -> None:
        tree = parse_tree('rpc: 0.4.0\n"[2.0,)": g:b\n"[1.0,2.0)": g:a:$rpc\n')
        result = read_versioned_artifacts(tree, "io.example", "auth", {"rpc": "0.4.0"})
        assert [r.safe_name for r in result] == ["[2.0,)", "[1.0,2.0)"]
        assert result[VersionRange.parse("[1.0,2.0)")][0].version == "0.4.0"

    def test_invalid_range_names_plugin(self) -> None:
        tree = parse_tree('"[1.0,oops)": g:a\n')
        with pytest.raises(MalformedVersionRange) as info:
            read_versioned_artifacts(tree, "io.example", "auth", {})
        assert info.value.plugin_id == "auth"
        assert "[1.0,oops)" in str(info.value)

    def test_bad_artifact_names_plugin_and_range(self) -> None:
        tree = parse_tree('"[1.0,)": "g:a:b:c"\n')
        with pytest.raises(MalformedArtifactDeclaration) as info:
            read_versioned_artifacts(tree, "io.example", "auth", {})
        assert "auth" in str(info.value)
        assert "[1.0,)" in str(info.value)

    def test_same_interval_later_spelling_wins(self) -> None:
        tree = parse_tree('"2.0": g:old\n"[1.0,)": g:mid\n"[2.0,)": g:new\n')
        result = read_versioned_artifacts(tree, "io.example", "auth", {})
        assert len(result) == 2
        last_range, last_artifacts = list(result.items())[-1]
        assert last_range.safe_name == "[2.0,)"
        assert last_artifacts[0].artifact_id == "new"


# ===========================================================================
# read_manifest / module_references
# ===========================================================================


class TestReadManifest:
    def test_missing_manifest_is_empty(self, tmp_path: Path) -> None:
        assert read_manifest(tmp_path) == EMPTY_MANIFEST

    def test_full_manifest(self, tmp_path: Path) -> None:
        (tmp_path / "manifest.yaml").write_text(
            "name: Auth\n"
            "prerequisites:\n"
            "  - serialization\n"
            "  - content-negotiation\n"
            "gradle:\n"
            "  repositories:\n"
            "    - url: https://maven.example.org/releases\n"
            "    - name: no-url\n"
            "    - url: https://maven.example.org/snapshots\n",
            encoding="utf-8",
        )
        manifest = read_manifest(tmp_path)
        assert manifest.prerequisites == ("serialization", "content-negotiation")
        assert manifest.repositories == (
            "https://maven.example.org/releases",
            "https://maven.example.org/snapshots",
        )

    def test_prerequisites_must_be_list(self, tmp_path: Path) -> None:
        (tmp_path / "manifest.yaml").write_text("prerequisites: auth\n", encoding="utf-8")
        with pytest.raises(UnexpectedConfigurationShape):
            read_manifest(tmp_path)


class TestModuleReferences:
    def test_finds_module_directories(self, registry) -> None:
        plugin_dir = registry.plugin(
            "rpc",
            module_dirs={"[1.0,2.0)": ["server", "core"], "[2.0,)": ["client", "server", "notes"]},
        )
        assert module_references(plugin_dir) == ["core", "server", "client"]

    def test_no_module_directories(self, registry) -> None:
        plugin_dir = registry.plugin("plain", '"[1.0,)": g:a\n')
        assert module_references(plugin_dir) == []

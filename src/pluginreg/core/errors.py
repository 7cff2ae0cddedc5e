"""Error types raised while reading and resolving the plugin registry.

Every error is fatal for the run: nothing is skipped or retried.  Each
error keeps its identifying context (plugin id, directory, offending
text) as attributes so that the CLI can print a precise diagnostic.
"""
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class RegistryError(Exception):
    """Base class for all plugin registry errors."""


class MalformedVersion(RegistryError):
    """Raised when a release identifier does not match the dotted grammar.

    Parameters
    ----------
    text:
        The offending release text.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Malformed version {text!r}: expected dotted numbers, e.g. '2.3.1'")


class MalformedVersionRange(RegistryError):
    """Raised when a version range expression cannot be parsed.

    Parameters
    ----------
    text:
        The raw range expression.
    reason:
        What was wrong with it.
    plugin_id:
        The plugin whose declaration file contained the range, when known.
    """

    def __init__(self, text: str, reason: str, plugin_id: str | None = None) -> None:
        self.text = text
        self.reason = reason
        self.plugin_id = plugin_id
        where = f" in plugin {plugin_id}" if plugin_id else ""
        super().__init__(f"Invalid version range {text!r}{where}: {reason}")

    def with_plugin(self, plugin_id: str) -> "MalformedVersionRange":
        """Return a copy of this error attributed to ``plugin_id``."""
        return MalformedVersionRange(self.text, self.reason, plugin_id=plugin_id)


class MalformedArtifactDeclaration(RegistryError):
    """Raised for an artifact declaration of an unexpected shape or syntax."""

    def __init__(self, message: str, value: object = None) -> None:
        self.value = value
        super().__init__(message)


class DuplicatePlugin(RegistryError):
    """Raised when two plugin directories share the same plugin id."""

    def __init__(self, previous: Path, duplicate: Path) -> None:
        self.previous = previous
        self.duplicate = duplicate
        super().__init__(f"Duplicate plugins found: {previous}, {duplicate}")


class MissingPrerequisite(RegistryError):
    """Raised when a manifest names a prerequisite that has no directory."""

    def __init__(self, plugin_id: str, prerequisite_id: str) -> None:
        self.plugin_id = plugin_id
        self.prerequisite_id = prerequisite_id
        super().__init__(f"Prerequisite plugin {prerequisite_id} for {plugin_id} not found")


class CyclicPrerequisite(RegistryError):
    """Raised when prerequisites loop back onto a plugin being resolved.

    Parameters
    ----------
    chain:
        Plugin ids from the outermost plugin to the repeated one, e.g.
        ``("a", "b", "a")``.
    """

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__(f"Cyclic prerequisites: {' -> '.join(self.chain)}")


class UnexpectedConfigurationShape(RegistryError):
    """Raised when a configuration tree node is not the expected kind.

    Parameters
    ----------
    message:
        What was expected and what was found.
    source:
        The file the node was read from, when known.
    """

    def __init__(self, message: str, source: Path | str | None = None) -> None:
        self.source = source
        prefix = f"{source}: " if source is not None else ""
        super().__init__(f"{prefix}{message}")

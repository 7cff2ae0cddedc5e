"""Generic configuration tree: maps, lists and scalars.

Declaration and manifest files are consumed through this small tagged
variant rather than through raw ``dict``/``list`` values so that every
shape mismatch fails with an explicit
:class:`~pluginreg.core.errors.UnexpectedConfigurationShape` naming the
file and key involved.

All scalars are strings; the loader never converts ``1.10`` into a float.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from pluginreg.core.errors import UnexpectedConfigurationShape


@dataclass(frozen=True)
class ScalarNode:
    """A leaf value."""

    content: str
    source: Path | None = field(default=None, compare=False)

    kind = "scalar"

    def as_map(self) -> "MapNode":
        raise _shape_error(self, "map")

    def as_list(self) -> "ListNode":
        raise _shape_error(self, "list")

    def as_scalar(self) -> "ScalarNode":
        return self


@dataclass(frozen=True)
class ListNode:
    """An ordered sequence of nodes."""

    items: tuple["ConfigNode", ...]
    source: Path | None = field(default=None, compare=False)

    kind = "list"

    def __iter__(self) -> Iterator["ConfigNode"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def as_map(self) -> "MapNode":
        raise _shape_error(self, "map")

    def as_list(self) -> "ListNode":
        return self

    def as_scalar(self) -> ScalarNode:
        raise _shape_error(self, "scalar")


@dataclass(frozen=True)
class MapNode:
    """An ordered mapping of string keys to nodes.

    Entries keep the order in which they appear in the source file.
    """

    entries: tuple[tuple[str, "ConfigNode"], ...]
    source: Path | None = field(default=None, compare=False)

    kind = "map"

    def __iter__(self) -> Iterator[tuple[str, "ConfigNode"]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self.entries)

    def keys(self) -> list[str]:
        return [k for k, _ in self.entries]

    def get(self, key: str) -> "ConfigNode | None":
        """Return the node stored under ``key``, or ``None`` if absent."""
        for k, value in self.entries:
            if k == key:
                return value
        return None

    def get_map(self, key: str) -> "MapNode | None":
        node = self.get(key)
        return None if node is None else _expect(node, "map", key, self.source).as_map()

    def get_list(self, key: str) -> ListNode | None:
        node = self.get(key)
        return None if node is None else _expect(node, "list", key, self.source).as_list()

    def get_scalar(self, key: str) -> ScalarNode | None:
        node = self.get(key)
        return None if node is None else _expect(node, "scalar", key, self.source).as_scalar()

    def as_map(self) -> "MapNode":
        return self

    def as_list(self) -> ListNode:
        raise _shape_error(self, "list")

    def as_scalar(self) -> ScalarNode:
        raise _shape_error(self, "scalar")


ConfigNode = Union[MapNode, ListNode, ScalarNode]


def _shape_error(node: ConfigNode, expected: str, key: str | None = None) -> UnexpectedConfigurationShape:
    where = f" for key {key!r}" if key is not None else ""
    return UnexpectedConfigurationShape(
        f"expected a {expected}{where}, found a {node.kind}", source=node.source
    )


def _expect(node: ConfigNode, expected: str, key: str, source: Path | None) -> ConfigNode:
    if node.kind != expected:
        raise UnexpectedConfigurationShape(
            f"expected a {expected} for key {key!r}, found a {node.kind}", source=source
        )
    return node

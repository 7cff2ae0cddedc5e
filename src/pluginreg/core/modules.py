"""Sub-distributions of the host framework that a plugin can target."""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping


class ProjectModule(Enum):
    """A sub-distribution of the host framework.

    The member value is the on-disk name used for module directories
    and module keys in dependency declarations.
    """

    core = "core"
    client = "client"
    server = "server"
    web = "web"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def names(cls) -> frozenset[str]:
        """Return every valid module name."""
        return frozenset(member.value for member in cls)

    @classmethod
    def parse(cls, name: str) -> "ProjectModule":
        """Return the module called ``name``.

        Raises
        ------
        ValueError
            If ``name`` is not a known module.
        """
        try:
            return cls(name)
        except ValueError:
            raise ValueError(
                f"Unknown module {name!r}; expected one of {', '.join(sorted(cls.names()))}"
            ) from None


# Presets for inter-module dependencies.
MODULE_PARENTS: Final[Mapping[ProjectModule, ProjectModule]] = MappingProxyType(
    {
        ProjectModule.client: ProjectModule.core,
        ProjectModule.server: ProjectModule.core,
        ProjectModule.web: ProjectModule.client,
    }
)

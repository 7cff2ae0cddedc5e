"""Package coordinates referenced by plugin dependency declarations.

Coordinate syntax
-----------------
::

    artifact                      group from the plugin directory, release version
    group:artifact                release version
    group:artifact:1.2.3          literal version
    group:artifact:{release}      release version, spelled out
    group:artifact:$name          version taken from the ``name`` variable
    group:artifact:${name}        same as above

"Release version" means the version is a placeholder that is replaced by
the host framework release under resolution (see
:meth:`ArtifactReference.resolve`).
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Final, Mapping, Union

from pluginreg.core.errors import MalformedArtifactDeclaration
from pluginreg.core.modules import ProjectModule
from pluginreg.versions.release import Release

_NAME: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9_.\-]+$")
_VARIABLE: Final[re.Pattern[str]] = re.compile(r"^\$(?:\{(?P<braced>[\w.\-]+)\}|(?P<bare>[\w.\-]+))$")

RELEASE_PLACEHOLDER: Final[str] = "{release}"


class _ReleaseVersion:
    """Sentinel for "the release being resolved"."""

    _instance: "_ReleaseVersion | None" = None

    def __new__(cls) -> "_ReleaseVersion":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "RELEASE"

    def __str__(self) -> str:
        return RELEASE_PLACEHOLDER


RELEASE: Final = _ReleaseVersion()

ArtifactVersion = Union[str, _ReleaseVersion]


@dataclass(frozen=True)
class ArtifactReference:
    """A single package coordinate.

    Parameters
    ----------
    group_id:
        Group of the package.
    artifact_id:
        Name of the package within its group.
    version:
        A literal version string, or :data:`RELEASE`.
    alias:
        Optional short name consumers use to refer to the artifact.
    module:
        The module this artifact belongs to; ``None`` means the plugin's
        primary distribution type.
    """

    group_id: str
    artifact_id: str
    version: ArtifactVersion = RELEASE
    alias: str | None = None
    module: ProjectModule | None = None

    @classmethod
    def parse(
        cls,
        text: str,
        group_id: str,
        version_variables: Mapping[str, str] | None = None,
        alias: str | None = None,
    ) -> "ArtifactReference":
        """Parse a coordinate string.

        Parameters
        ----------
        text:
            The coordinate, in any of the forms listed in the module docstring.
        group_id:
            Group used when ``text`` names only an artifact.
        version_variables:
            Values for ``$name`` version references.
        alias:
            Alias to attach to the parsed reference.

        Raises
        ------
        MalformedArtifactDeclaration
            On empty parts, too many parts, or an unknown variable.
        """
        parts = text.strip().split(":")
        if len(parts) == 1:
            group, artifact, version_text = group_id, parts[0], None
        elif len(parts) == 2:
            group, artifact, version_text = parts[0], parts[1], None
        elif len(parts) == 3:
            group, artifact, version_text = parts
        else:
            raise MalformedArtifactDeclaration(
                f"Invalid artifact coordinate {text!r}: expected at most group:artifact:version",
                value=text,
            )
        for part in (group, artifact):
            if not _NAME.match(part):
                raise MalformedArtifactDeclaration(
                    f"Invalid artifact coordinate {text!r}: bad name {part!r}", value=text
                )
        version = _parse_version(text, version_text, version_variables or {})
        return cls(group, artifact, version, alias=alias)

    @property
    def is_release_version(self) -> bool:
        return self.version is RELEASE

    def resolve(self, release: Release | str) -> "ArtifactReference":
        """Return a copy whose placeholder version is replaced by ``release``."""
        if self.version is not RELEASE:
            return self
        return replace(self, version=str(release))

    def with_module(self, module: ProjectModule | None) -> "ArtifactReference":
        return replace(self, module=module)

    @property
    def coordinate(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def __str__(self) -> str:
        return self.coordinate


def _parse_version(
    text: str, version_text: str | None, version_variables: Mapping[str, str]
) -> ArtifactVersion:
    if version_text is None or version_text == RELEASE_PLACEHOLDER:
        return RELEASE
    if not version_text:
        raise MalformedArtifactDeclaration(
            f"Invalid artifact coordinate {text!r}: empty version", value=text
        )
    variable = _VARIABLE.match(version_text)
    if variable is None:
        return version_text
    name = variable.group("braced") or variable.group("bare")
    try:
        return version_variables[name]
    except KeyError:
        raise MalformedArtifactDeclaration(
            f"Unknown version variable {name!r} in artifact {text!r}", value=text
        ) from None

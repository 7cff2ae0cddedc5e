"""Core domain logic.

Foundational models shared by every other subpackage: the project
module table and the error taxonomy.  Submodules in core/ should not
import from resolver/ or cli/.
"""
from __future__ import annotations

from pluginreg.core.errors import (
    CyclicPrerequisite,
    DuplicatePlugin,
    MalformedArtifactDeclaration,
    MalformedVersion,
    MalformedVersionRange,
    MissingPrerequisite,
    RegistryError,
    UnexpectedConfigurationShape,
)
from pluginreg.core.modules import MODULE_PARENTS, ProjectModule
from pluginreg.core.settings import DEFAULT_SETTINGS, RegistrySettings

__all__ = [
    "DEFAULT_SETTINGS",
    "MODULE_PARENTS",
    "ProjectModule",
    "RegistrySettings",
    "RegistryError",
    "MalformedVersion",
    "MalformedVersionRange",
    "MalformedArtifactDeclaration",
    "DuplicatePlugin",
    "MissingPrerequisite",
    "CyclicPrerequisite",
    "UnexpectedConfigurationShape",
]

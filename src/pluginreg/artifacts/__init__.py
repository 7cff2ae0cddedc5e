"""Artifact references and the release-version placeholder."""
from __future__ import annotations

from pluginreg.artifacts.reference import (
    RELEASE,
    RELEASE_PLACEHOLDER,
    ArtifactReference,
    ArtifactVersion,
)

__all__ = ["ArtifactReference", "ArtifactVersion", "RELEASE", "RELEASE_PLACEHOLDER"]

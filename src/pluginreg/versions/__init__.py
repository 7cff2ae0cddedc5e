"""Release identifiers and version ranges."""
from __future__ import annotations

from pluginreg.versions.release import Release, VersionRange, parse_release

__all__ = ["Release", "VersionRange", "parse_release"]

"""JSON/YAML export of resolved configurations."""
from __future__ import annotations

from pluginreg.export.serializer import ConfigurationSerializer

__all__ = ["ConfigurationSerializer"]

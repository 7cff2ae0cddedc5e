"""Load YAML files into :mod:`pluginreg.tree.nodes` trees."""
from __future__ import annotations

import logging
from pathlib import Path

import yaml

from pluginreg.core.errors import UnexpectedConfigurationShape
from pluginreg.tree.nodes import ConfigNode, ListNode, MapNode, ScalarNode

logger = logging.getLogger(__name__)


def to_tree(data: object, source: Path | None = None) -> ConfigNode:
    """Convert plain ``yaml.BaseLoader`` output into a configuration tree.

    ``None`` (an empty value) becomes an empty scalar.
    """
    if isinstance(data, dict):
        return MapNode(
            tuple((str(key), to_tree(value, source)) for key, value in data.items()),
            source=source,
        )
    if isinstance(data, list):
        return ListNode(tuple(to_tree(item, source) for item in data), source=source)
    if data is None:
        return ScalarNode("", source=source)
    return ScalarNode(str(data), source=source)


def parse_tree(text: str, source: Path | None = None) -> MapNode:
    """Parse YAML ``text`` whose top level must be a mapping.

    An empty document yields an empty map.

    Raises
    ------
    UnexpectedConfigurationShape
        If the text is not valid YAML or its top level is not a mapping.
    """
    try:
        # BaseLoader keeps every scalar as a string
        data = yaml.load(text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        raise UnexpectedConfigurationShape(f"invalid YAML: {exc}", source=source) from exc
    if data is None or data == "":
        return MapNode((), source=source)
    return to_tree(data, source).as_map()


def load_tree(path: Path) -> MapNode | None:
    """Read the YAML file at ``path``; ``None`` if it does not exist."""
    if not path.is_file():
        return None
    logger.debug("Reading %s", path)
    return parse_tree(path.read_text(encoding="utf-8"), source=path)

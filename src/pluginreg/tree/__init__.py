"""Generic configuration tree and its YAML loader."""
from __future__ import annotations

from pluginreg.tree.loader import load_tree, parse_tree, to_tree
from pluginreg.tree.nodes import ConfigNode, ListNode, MapNode, ScalarNode

__all__ = [
    "ConfigNode",
    "ListNode",
    "MapNode",
    "ScalarNode",
    "load_tree",
    "parse_tree",
    "to_tree",
]

#!/usr/bin/env python3
"""Example: Quickstart — plugin-registry

Resolve the sample registry in ``examples/registry`` for two releases,
print every configuration, then reduce to the latest release per path.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install plugin-registry
"""
from __future__ import annotations

from pathlib import Path

import pluginreg

ROOT = Path(__file__).parent / "registry"


def main() -> None:
    print(f"plugin-registry version: {pluginreg.__version__}")

    # Step 1: Resolve every plugin for the target releases
    configs = pluginreg.collect(["2.3.12", "3.0.1"], root=ROOT)
    print(f"Resolved {len(configs)} configuration(s)")
    for config in configs:
        parent = f" (extends {config.parent})" if config.parent else ""
        print(f"  {config.key:<30} {config.path}{parent}")
        for artifact in config.artifacts:
            alias = f" as {artifact.alias}" if artifact.alias else ""
            print(f"      {artifact.coordinate}{alias}")

    # Step 2: Only the rpc plugin
    rpc = pluginreg.collect(["3.0.1"], root=ROOT, name_filter=lambda name: name == "rpc")
    print(f"\nrpc repositories: {list(rpc[0].repositories)}")

    # Step 3: One configuration per source directory
    latest = pluginreg.latest_by_path(configs)
    print(f"\nLatest per path: {len(latest)} configuration(s)")
    for config in latest:
        print(f"  {config.path} @ {config.release}")


if __name__ == "__main__":
    main()

"""Integration tests.

Integration tests build real registry trees on disk and run the whole
enumeration, resolution and ordering pipeline against them.  They are
kept in a separate directory so they can be excluded from the fast
unit-test run with ``pytest tests/unit/``.
"""
from __future__ import annotations

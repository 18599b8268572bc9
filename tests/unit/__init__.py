"""
tests.unit
==========

Example-based tests, one module per cpm module. Shared fixtures live in
``tests/conftest.py``; the helpers here load generated files by suffix.
"""

from __future__ import annotations

from typing import Iterable

__all__ = ["only", "by_name"]


def by_name(files: Iterable, suffix: str):
    """Return the single rendered file whose path ends with ``suffix``."""
    files = list(files)
    matches = [f for f in files if str(f.path).endswith(suffix)]
    assert len(matches) == 1, f"expected one file ending in {suffix!r}, got {[str(f.path) for f in files]}"
    return matches[0]


def only(files):
    files = list(files)
    assert len(files) == 1, [str(f.path) for f in files]
    return files[0]

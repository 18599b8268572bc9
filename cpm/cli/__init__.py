"""
cpm.cli
=======

Typer-based command-line interface, installed as the ``cpm`` console script.

    >>> from cpm.cli import main
    >>> main(["generate", "go", "-m", "contract.manifest.json", "-o", "out/"])
"""

from __future__ import annotations

from .main import app, main, run

__all__ = ["app", "main", "run"]

"""
Version helpers for cpm.

A static PEP 440 version, plus the user agent string sent to RPC nodes.
"""

from __future__ import annotations

# Bump this when publishing
__version__ = "0.3.0"


def user_agent() -> str:
    """User-Agent header value, e.g. 'cpm/0.3.0'."""
    return f"cpm/{__version__}"


__all__ = ["__version__", "user_agent"]

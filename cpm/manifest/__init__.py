"""
cpm manifest model & loading.

- Model dataclasses: ``Manifest``, ``Method``, ``Event``, ``Parameter``,
  ``ParamType``.
- Loading: ``parse_manifest`` (dict / JSON text) and ``load_manifest``
  (file path).
"""

from .model import Event, Manifest, Method, Parameter, ParamType
from .parse import load_manifest, parse_manifest

__all__ = [
    "Manifest",
    "Method",
    "Event",
    "Parameter",
    "ParamType",
    "parse_manifest",
    "load_manifest",
]

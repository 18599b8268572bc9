"""
JSON Schema for the subset of a Neo N3 contract manifest cpm reads.

Only the ABI shape is checked here; type names are resolved (and rejected)
by `ParamType.parse` so the error can name the offending item.
"""

from __future__ import annotations

from typing import Any, Dict

_PARAMETER: Dict[str, Any] = {
    "type": "object",
    "required": ["type"],
    "properties": {
        "name": {"type": "string"},
        "type": {"type": "string", "minLength": 1},
    },
}

_PARAMETERS: Dict[str, Any] = {
    "type": ["array", "null"],
    "items": _PARAMETER,
}

MANIFEST_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Neo N3 contract manifest (ABI subset)",
    "type": "object",
    "required": ["name", "abi"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "abi": {
            "type": "object",
            "required": ["methods"],
            "properties": {
                "methods": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["name", "returntype"],
                        "properties": {
                            "name": {"type": "string", "minLength": 1},
                            "parameters": _PARAMETERS,
                            "returntype": {"type": "string", "minLength": 1},
                            "offset": {"type": "integer"},
                            "safe": {"type": "boolean"},
                        },
                    },
                },
                "events": {
                    "type": ["array", "null"],
                    "items": {
                        "type": "object",
                        "required": ["name"],
                        "properties": {
                            "name": {"type": "string", "minLength": 1},
                            "parameters": _PARAMETERS,
                        },
                    },
                },
            },
        },
    },
}

__all__ = ["MANIFEST_SCHEMA"]

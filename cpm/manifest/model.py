from __future__ import annotations

"""
In-memory contract manifest
===========================

These dataclasses model the part of a Neo N3 contract manifest that SDK
generation consumes: the contract name, its ABI methods and events. Instances
are produced by `cpm.manifest.parse.parse_manifest` and never mutated.

- `ParamType` is a closed enumeration; its values are the manifest spellings.
- Method and event names may repeat (overloads by parameter count).
- Parameter names may be empty.
- Fields the generators do not read (groups, permissions, trusts, ...) are
  carried in `Manifest.extra` so the document can be written back unchanged.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

from ..errors import ManifestError


class ParamType(str, Enum):
    ANY = "Any"
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    BYTE_ARRAY = "ByteArray"
    STRING = "String"
    HASH160 = "Hash160"
    HASH256 = "Hash256"
    PUBLIC_KEY = "PublicKey"
    ARRAY = "Array"
    MAP = "Map"
    INTEROP_INTERFACE = "InteropInterface"
    VOID = "Void"

    @classmethod
    def parse(cls, text: str) -> "ParamType":
        """Case-insensitive lookup by manifest spelling (``Bool`` is accepted too)."""
        key = str(text).strip().lower()
        if key == "bool":
            return cls.BOOLEAN
        for member in cls:
            if member.value.lower() == key:
                return member
        raise ManifestError(f"unknown parameter type {text!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Parameter:
    name: str
    type: ParamType

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type.value}


@dataclass(frozen=True)
class Method:
    name: str
    parameters: Tuple[Parameter, ...] = ()
    return_type: ParamType = ParamType.VOID
    safe: bool = False
    offset: int = 0

    @property
    def is_private(self) -> bool:
        return self.name.startswith("_")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "parameters": [p.to_dict() for p in self.parameters],
            "returntype": self.return_type.value,
            "offset": self.offset,
            "safe": self.safe,
        }


@dataclass(frozen=True)
class Event:
    name: str
    parameters: Tuple[Parameter, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "parameters": [p.to_dict() for p in self.parameters]}


@dataclass(frozen=True)
class Manifest:
    name: str
    methods: Tuple[Method, ...] = ()
    events: Tuple[Event, ...] = ()
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        out.update({k: v for k, v in self.extra.items() if k not in ("name", "abi")})
        out["abi"] = {
            "methods": [m.to_dict() for m in self.methods],
            "events": [e.to_dict() for e in self.events],
        }
        return out


__all__ = ["ParamType", "Parameter", "Method", "Event", "Manifest"]

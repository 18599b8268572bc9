from __future__ import annotations

"""
Language-bound contract template
================================

The intermediate form every renderer consumes. A `ContractTemplate` is the
manifest after one `TypeMapper` has been applied to it: names resolved and
converted to the target case convention, type names spelled in the target
language, private methods dropped. The ABI spellings are kept next to the
mapped ones because off-chain renderers look up wrap/unwrap helpers by them.

Instances are produced by `cpm.codegen.builder.build_template`.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Argument:
    name: str
    type: str
    type_abi: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "type_abi": self.type_abi}


@dataclass(frozen=True)
class MethodTemplate:
    name: str          # resolved and case-converted
    name_abi: str      # as declared in the manifest
    comment: str
    safe: bool
    arguments: Tuple[Argument, ...]
    return_type: str
    return_type_abi: str

    @property
    def is_void(self) -> bool:
        return self.return_type_abi == "Void"

    @property
    def is_iterator(self) -> bool:
        return self.return_type_abi == "InteropInterface"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "name_abi": self.name_abi,
            "comment": self.comment,
            "safe": self.safe,
            "arguments": [a.to_dict() for a in self.arguments],
            "return_type": self.return_type,
            "return_type_abi": self.return_type_abi,
        }


@dataclass(frozen=True)
class EventTemplate:
    name: str
    arguments: Tuple[Argument, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "arguments": [a.to_dict() for a in self.arguments]}


@dataclass(frozen=True)
class ContractTemplate:
    contract_name: str
    hash: str  # "0x" + little-endian hex
    methods: Tuple[MethodTemplate, ...] = ()
    events: Tuple[EventTemplate, ...] = ()

    @property
    def hash_le(self) -> str:
        """Little-endian hex without the ``0x`` prefix."""
        return self.hash[2:] if self.hash.startswith("0x") else self.hash

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract_name": self.contract_name,
            "hash": self.hash,
            "methods": [m.to_dict() for m in self.methods],
            "events": [e.to_dict() for e in self.events],
        }


__all__ = ["Argument", "MethodTemplate", "EventTemplate", "ContractTemplate"]

"""
Contract script hashes.

A script hash is a 20-byte value. Internally it is kept big-endian; users and
explorers display it little-endian with a ``0x`` prefix, which is the form
accepted on the command line and in ``cpm.yaml``.
"""

from __future__ import annotations

import binascii
import re
from dataclasses import dataclass

SCRIPT_HASH_SIZE = 20

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


@dataclass(frozen=True)
class ScriptHash:
    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != SCRIPT_HASH_SIZE:
            raise ValueError(f"script hash must be {SCRIPT_HASH_SIZE} bytes, got {len(self.data)}")

    @classmethod
    def zero(cls) -> "ScriptHash":
        return cls(bytes(SCRIPT_HASH_SIZE))

    @classmethod
    def from_string_le(cls, text: str) -> "ScriptHash":
        """Parse the little-endian display form (``0x`` prefix optional)."""
        s = text.strip()
        if s[:2].lower() == "0x":
            s = s[2:]
        if len(s) != SCRIPT_HASH_SIZE * 2 or not _HEX_RE.match(s):
            raise ValueError(f"invalid script hash {text!r}: expected {SCRIPT_HASH_SIZE * 2} hex characters")
        return cls(binascii.unhexlify(s)[::-1])

    def to_bytes_be(self) -> bytes:
        return self.data

    def string_be(self) -> str:
        return self.data.hex()

    def string_le(self) -> str:
        return self.data[::-1].hex()

    def __str__(self) -> str:
        return "0x" + self.string_le()


__all__ = ["ScriptHash", "SCRIPT_HASH_SIZE"]

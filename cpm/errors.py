"""
Typed error classes for cpm.

Generation code raises these so callers can tell input problems (a bad
manifest or config), resource problems (the destination is not writable)
and internal faults (a type table gap or a corrupted template) apart while
still being able to catch the base `CpmError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

__all__ = [
    "CpmError",
    "ManifestError",
    "UnmappedTypeError",
    "UnsupportedTargetError",
    "TemplateError",
    "GenerationError",
    "ConfigError",
    "DownloadError",
    "RpcError",
]


class CpmError(Exception):
    """Base class for all cpm errors."""


@dataclass
class ManifestError(CpmError):
    """Raised when a contract manifest is malformed or uses an unknown type."""

    message: str
    path: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = f" at {self.path}" if self.path else ""
        return f"invalid manifest{where}: {self.message}"


@dataclass
class UnmappedTypeError(CpmError):
    """
    A language table has no entry for a parameter type.

    The type enumeration is closed, so this always points at a bug in the
    tables rather than at user input.
    """

    language: str
    mode: str
    type_name: str
    table: str = "type"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"no {self.table} mapping for {self.type_name!r} in {self.language}/{self.mode}"


@dataclass
class UnsupportedTargetError(CpmError):
    language: str
    mode: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.mode} SDK generation is not supported for {self.language}"


@dataclass
class TemplateError(CpmError):
    """A fixed source template failed to render (internal error)."""

    message: str
    template: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        name = f" [{self.template}]" if self.template else ""
        return f"template error{name}: {self.message}"


@dataclass
class GenerationError(CpmError):
    """Creating a directory or writing an output file failed."""

    message: str
    path: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        suffix = f" ({self.path})" if self.path else ""
        return f"{self.message}{suffix}"


@dataclass
class ConfigError(CpmError):
    message: str
    path: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        suffix = f" ({self.path})" if self.path else ""
        return f"{self.message}{suffix}"


@dataclass
class DownloadError(CpmError):
    """The external downloader could not fetch a contract."""

    message: str
    host: Optional[str] = None
    output: str = ""

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = f" from {self.host}" if self.host else ""
        return f"{self.message}{where}"


@dataclass
class RpcError(CpmError):
    """Raised when a JSON-RPC call fails or returns an error object."""

    code: int
    message: str
    data: Optional[Any] = None
    method: Optional[str] = None
    host: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        parts = [f"RPC[{self.method or '-'}] code={self.code} msg={self.message!r}"]
        if self.host:
            parts.append(f"host={self.host}")
        if self.data is not None:
            parts.append(f"data={self.data!r}")
        return " ".join(parts)

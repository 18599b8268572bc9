"""Target languages and SDK flavours."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from ..errors import UnsupportedTargetError


class Language(str, Enum):
    GO = "go"
    PYTHON = "python"
    JAVA = "java"
    CSHARP = "csharp"
    TYPESCRIPT = "ts"

    def __str__(self) -> str:
        return self.value


class SdkMode(str, Enum):
    # bindings compiled into another contract
    ONCHAIN = "onchain"
    # remote invocation over RPC
    OFFCHAIN = "offchain"

    def __str__(self) -> str:
        return self.value


Target = Tuple[Language, SdkMode]


def parse_target(language: "Language | str", mode: "SdkMode | str") -> Target:
    """Coerce a (language, mode) pair; unknown spellings are unsupported targets."""
    try:
        return Language(language), SdkMode(mode)
    except ValueError:
        raise UnsupportedTargetError(str(language), str(mode)) from None


__all__ = ["Language", "SdkMode", "Target", "parse_target"]

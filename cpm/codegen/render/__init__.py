"""
Renderer registry.

Maps every supported (language, mode) pair onto its renderer and records
whether the target language resolves method overloads on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ...errors import UnsupportedTargetError
from ..targets import Language, SdkMode, parse_target
from . import csharp, golang, java, python, typescript
from .common import RenderedFile, Renderer


@dataclass(frozen=True)
class RendererSpec:
    render: Renderer
    support_method_overload: bool = False


RENDERERS: Dict[Tuple[Language, SdkMode], RendererSpec] = {
    (Language.GO, SdkMode.ONCHAIN): RendererSpec(golang.render_onchain),
    (Language.GO, SdkMode.OFFCHAIN): RendererSpec(golang.render_offchain),
    (Language.PYTHON, SdkMode.ONCHAIN): RendererSpec(python.render_onchain),
    (Language.PYTHON, SdkMode.OFFCHAIN): RendererSpec(python.render_offchain),
    (Language.JAVA, SdkMode.ONCHAIN): RendererSpec(java.render_onchain),
    (Language.JAVA, SdkMode.OFFCHAIN): RendererSpec(java.render_offchain, support_method_overload=True),
    (Language.CSHARP, SdkMode.ONCHAIN): RendererSpec(csharp.render_onchain),
    (Language.TYPESCRIPT, SdkMode.OFFCHAIN): RendererSpec(typescript.render_offchain),
}


def get_renderer(language: Language | str, mode: SdkMode | str) -> RendererSpec:
    lang, md = parse_target(language, mode)
    try:
        return RENDERERS[(lang, md)]
    except KeyError:
        raise UnsupportedTargetError(lang.value, md.value) from None


def supported_targets():
    return sorted(RENDERERS, key=lambda t: (t[0].value, t[1].value))


__all__ = ["RendererSpec", "RENDERERS", "get_renderer", "supported_targets", "RenderedFile", "Renderer"]

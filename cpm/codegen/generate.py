"""
SDK generation driver.

    cfg = GenerateConfig(manifest=m, contract_hash=h, destination="cpm_out/offchain/python/",
                         mode=SdkMode.OFFCHAIN)
    written = generate_sdk(cfg, Language.PYTHON)

Everything is rendered in memory before the first write, so an internal
template fault never leaves a half-written SDK behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import List, Optional, Union

from ..errors import GenerationError
from ..hashes import ScriptHash
from ..manifest.model import Manifest
from .builder import build_template
from .mappers import TypeMapper, get_mapper
from .render import get_renderer
from .render.common import RenderedFile
from .sink import FileSystemSink, OutputSink
from .targets import Language, SdkMode, parse_target

log = logging.getLogger(__name__)


@dataclass
class GenerateConfig:
    manifest: Manifest
    contract_hash: ScriptHash
    destination: str
    mode: SdkMode = SdkMode.ONCHAIN
    # overrides the registry mapper for the language (tests, custom tables)
    mapper: Optional[TypeMapper] = None


def render_sdk(cfg: GenerateConfig, language: Union[Language, str]) -> List[RenderedFile]:
    """Render all files for ``language`` without writing anything."""
    lang, mode = parse_target(language, cfg.mode)
    spec = get_renderer(lang, mode)
    mapper = cfg.mapper or get_mapper(lang, mode)
    ctr = build_template(
        cfg.manifest,
        mapper,
        cfg.contract_hash,
        support_method_overload=spec.support_method_overload,
    )
    return spec.render(ctr, mapper, cfg.manifest.name)


def generate_sdk(
    cfg: GenerateConfig,
    language: Union[Language, str],
    sink: Optional[OutputSink] = None,
) -> List[PurePosixPath]:
    """
    Render and write the SDK for ``language`` in ``cfg.mode``.

    Returns the written paths (destination included).

    Raises:
        UnsupportedTargetError: the pair has no renderer; nothing is written.
        TemplateError / UnmappedTypeError: internal faults; nothing is written.
        GenerationError: creating a directory or writing a file failed.
    """
    lang, mode = parse_target(language, cfg.mode)
    files = render_sdk(cfg, lang)
    sink = sink if sink is not None else FileSystemSink()
    dest = PurePosixPath(cfg.destination)

    written: List[PurePosixPath] = []
    for dirpath in _directories(dest, files):
        try:
            sink.makedirs(dirpath)
        except OSError as e:
            raise GenerationError(f"can't create directory: {e.strerror or e}", path=str(dirpath)) from e
    for f in files:
        path = dest / f.path
        try:
            with sink.open(path) as fh:
                fh.write(f.content)
        except OSError as e:
            raise GenerationError(f"can't write output file: {e.strerror or e}", path=str(path)) from e
        written.append(path)

    log.info(
        "Created %s SDK for contract '%s' at %s with contract hash 0x%s",
        mode.value,
        cfg.manifest.name,
        dest,
        cfg.contract_hash.string_le(),
        extra={"contract": cfg.manifest.name, "language": lang.value, "mode": mode.value},
    )
    return written


def _directories(dest: PurePosixPath, files: List[RenderedFile]) -> List[PurePosixPath]:
    dirs = [dest]
    for f in files:
        parent = dest / f.path.parent
        if parent not in dirs:
            dirs.append(parent)
    return dirs


__all__ = ["GenerateConfig", "generate_sdk", "render_sdk"]

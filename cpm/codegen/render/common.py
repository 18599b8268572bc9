"""
Shared pieces for the per-language renderers.

Every renderer is a pure function ``render(ctr, mapper, manifest_name)`` returning
the files to write as `RenderedFile` values; nothing touches the disk until
all of them rendered successfully.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Callable, Iterable, List

from ...errors import TemplateError
from ..mappers import TypeMapper
from ..model import Argument, ContractTemplate
from ..naming import upper_first

Renderer = Callable[[ContractTemplate, TypeMapper, str], List["RenderedFile"]]


@dataclass(frozen=True)
class RenderedFile:
    path: PurePosixPath  # relative to the SDK destination
    content: str


def fill(template: str, template_name: str, /, **values: object) -> str:
    """`str.format` with template faults reported as `TemplateError`.

    ``template_name`` is positional-only so templates may use a ``{name}`` field.
    """
    try:
        return template.format(**values)
    except (KeyError, IndexError, ValueError) as e:
        raise TemplateError(f"{type(e).__name__}: {e}", template=template_name) from e


def join_args(args: Iterable[Argument], fmt: str, sep: str = ", ") -> str:
    """Format every argument with ``fmt`` (fields: name, type, type_abi)."""
    return sep.join(fmt.format(name=a.name, type=a.type, type_abi=a.type_abi) for a in args)


__all__ = ["RenderedFile", "Renderer", "fill", "join_args", "upper_first"]

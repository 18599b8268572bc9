"""
Manifest -> ContractTemplate.

Overloads are resolved before the language's case convention is applied:
the first occurrence of a name keeps it, later occurrences get the
parameter count as a suffix, and the suffix grows a leading ``_`` until the
candidate is unused::

    f(a)        -> f
    f(a, b)     -> f_2
    f(a, b, c)  -> f_3
    f(x, y)     -> f__2
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Hashable, Iterable, List, Set, Tuple

from ..hashes import ScriptHash
from ..manifest.model import Event, Manifest, Method, Parameter
from .mappers import TypeMapper
from .model import Argument, ContractTemplate, EventTemplate, MethodTemplate
from .naming import sanitize_contract_name

log = logging.getLogger(__name__)


def build_template(
    manifest: Manifest,
    mapper: TypeMapper,
    contract_hash: ScriptHash,
    *,
    support_method_overload: bool = False,
) -> ContractTemplate:
    """
    Apply ``mapper`` to ``manifest``.

    Methods whose name starts with ``_`` are skipped. With
    ``support_method_overload`` the target language resolves overloads by
    signature, so repeated names are kept as they are.
    """
    public = [m for m in manifest.methods if not m.is_private]
    names = [m.name for m in public] if support_method_overload else resolve_method_names(public)

    methods = tuple(_method_template(m, name, mapper) for m, name in zip(public, names))
    methods = _dedupe_mapped(methods, by_signature=support_method_overload)
    events = tuple(_event_template(e, mapper) for e in manifest.events)

    log.debug(
        "built %s/%s template for %s: %d methods, %d events",
        mapper.language.value,
        mapper.mode.value,
        manifest.name,
        len(methods),
        len(events),
    )
    return ContractTemplate(
        contract_name=sanitize_contract_name(manifest.name),
        hash="0x" + contract_hash.string_le(),
        methods=methods,
        events=events,
    )


def resolve_method_names(methods: Iterable[Method]) -> List[str]:
    """Unique name per method, in order."""
    methods = list(methods)
    used: Dict[str, bool] = {m.name: False for m in methods}
    out: List[str] = []
    for m in methods:
        name = m.name
        if used.get(name, True):
            suffix = str(len(m.parameters))
            while used.get(name, False):
                suffix = "_" + suffix
                name = m.name + suffix
        used[name] = True
        out.append(name)
    return out


def _dedupe_mapped(methods: Tuple[MethodTemplate, ...], *, by_signature: bool = False) -> Tuple[MethodTemplate, ...]:
    """
    Keep names unique after the case convention ran.

    ``add_2`` and ``add__2`` are distinct, but camel-case conventions fold
    both into ``add2``; a later duplicate gets its parameter count appended
    until it is free. With ``by_signature`` only a repeated name with the
    same argument types counts as a duplicate, since overloading resolves
    the rest.
    """

    def key(name: str, m: MethodTemplate) -> Hashable:
        return (name, tuple(a.type for a in m.arguments)) if by_signature else name

    taken: Set[Hashable] = set()
    out: List[MethodTemplate] = []
    for m in methods:
        name = m.name
        while key(name, m) in taken:
            name = f"{name}_{len(m.arguments)}"
        if name != m.name:
            log.debug("renamed %s to %s after case conversion", m.name, name)
            m = replace(m, name=name)
        taken.add(key(name, m))
        out.append(m)
    return tuple(out)


def _arguments(params: Tuple[Parameter, ...], mapper: TypeMapper) -> Tuple[Argument, ...]:
    return tuple(
        Argument(name=p.name or f"arg{i}", type=mapper.map_type(p.type), type_abi=p.type.value)
        for i, p in enumerate(params)
    )


def _method_template(method: Method, name: str, mapper: TypeMapper) -> MethodTemplate:
    return MethodTemplate(
        name=mapper.map_method_name(name),
        name_abi=method.name,
        comment=f"invokes `{method.name}` method of contract.",
        safe=method.safe,
        arguments=_arguments(method.parameters, mapper),
        return_type=mapper.return_type(method.return_type),
        return_type_abi=method.return_type.value,
    )


def _event_template(event: Event, mapper: TypeMapper) -> EventTemplate:
    return EventTemplate(name=event.name, arguments=_arguments(event.parameters, mapper))


__all__ = ["build_template", "resolve_method_names"]

from __future__ import annotations

"""
Manifest loading & validation

Turns a manifest JSON document (dict, JSON text or a file) into the immutable
`Manifest` model:

- Schema validation with `jsonschema` (ABI shape only)
- Type-name resolution into `ParamType` (unknown names are input errors)
- Empty parameter lists / null arrays normalised to empty tuples

All failures surface as `ManifestError` carrying a JSON-pointer-like path.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import jsonschema
from jsonschema.exceptions import best_match

from ..errors import ManifestError
from .model import Event, Manifest, Method, Parameter, ParamType
from .schema import MANIFEST_SCHEMA

_VALIDATOR = jsonschema.Draft7Validator(MANIFEST_SCHEMA)


def parse_manifest(obj: Union[str, bytes, Dict[str, Any]]) -> Manifest:
    """
    Parse a manifest given as a dict or as JSON text.

    Raises:
        ManifestError: on invalid JSON, schema violations or unknown types.
    """
    raw = _load_json(obj)
    _validate(raw)

    abi = raw["abi"]
    methods = tuple(_parse_method(m, f"abi.methods[{i}]") for i, m in enumerate(abi.get("methods") or []))
    events = tuple(_parse_event(e, f"abi.events[{i}]") for i, e in enumerate(abi.get("events") or []))
    extra = {k: v for k, v in raw.items() if k not in ("name", "abi")}
    return Manifest(name=raw["name"], methods=methods, events=events, extra=extra)


def load_manifest(path: Union[str, Path]) -> Manifest:
    """Read and parse a manifest file (UTF-8 JSON)."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"can't read manifest file: {e.strerror or e}", path=str(p)) from e
    return parse_manifest(text)


def _load_json(obj: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(obj, dict):
        return obj
    if isinstance(obj, (str, bytes)):
        try:
            val = json.loads(obj)
        except json.JSONDecodeError as e:
            raise ManifestError(f"manifest JSON parse error: {e}") from e
        if not isinstance(val, dict):
            raise ManifestError("manifest top-level must be an object")
        return val
    raise ManifestError(f"unsupported manifest input type: {type(obj).__name__}")


def _validate(raw: Dict[str, Any]) -> None:
    error = best_match(_VALIDATOR.iter_errors(raw))
    if error is not None:
        path = ".".join(str(p) for p in error.absolute_path) or None
        raise ManifestError(error.message, path=path)


def _parse_type(value: str, path: str) -> ParamType:
    try:
        return ParamType.parse(value)
    except ManifestError as e:
        raise ManifestError(e.message, path=path) from None


def _parse_params(items: Any, path: str) -> Tuple[Parameter, ...]:
    out: List[Parameter] = []
    for i, p in enumerate(items or []):
        ppath = f"{path}.parameters[{i}]"
        out.append(Parameter(name=p.get("name") or "", type=_parse_type(p["type"], f"{ppath}.type")))
    return tuple(out)


def _parse_method(item: Dict[str, Any], path: str) -> Method:
    return Method(
        name=item["name"],
        parameters=_parse_params(item.get("parameters"), path),
        return_type=_parse_type(item["returntype"], f"{path}.returntype"),
        safe=bool(item.get("safe", False)),
        offset=int(item.get("offset", 0)),
    )


def _parse_event(item: Dict[str, Any], path: str) -> Event:
    return Event(name=item["name"], parameters=_parse_params(item.get("parameters"), path))


__all__ = ["parse_manifest", "load_manifest"]

"""
Identifier case conversion for generated code.

The converters follow the rules of the widely used ``strcase`` family
(ASCII only): word boundaries are case changes, digits and the separators
``space _ - .``. They are pure and stateless so a `TypeMapper` can hold any
of them as its method-name convention.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable

from ..errors import ManifestError

NameConverter = Callable[[str], str]

_SEPARATORS = " _-."
_NON_WORD = re.compile(r"\W", re.ASCII)
_NON_WORD_RUN = re.compile(r"\W+", re.ASCII)


def _is_upper(c: str) -> bool:
    return "A" <= c <= "Z"


def _is_lower(c: str) -> bool:
    return "a" <= c <= "z"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _camel(s: str, init_upper: bool) -> str:
    s = s.strip()
    out = []
    cap_next = init_upper
    prev_upper = False
    for i, c in enumerate(s):
        upper, lower = _is_upper(c), _is_lower(c)
        if cap_next:
            if lower:
                c = c.upper()
        elif i == 0:
            if upper:
                c = c.lower()
        elif prev_upper and upper:
            c = c.lower()
        prev_upper = upper
        if upper or lower:
            out.append(c)
            cap_next = False
        elif _is_digit(c):
            out.append(c)
            cap_next = True
        else:
            cap_next = c in _SEPARATORS
    return "".join(out)


def to_upper_camel(s: str) -> str:
    """``balance_of`` -> ``BalanceOf``"""
    return _camel(s, True)


def to_lower_camel(s: str) -> str:
    """``balance_of`` -> ``balanceOf``"""
    return _camel(s, False)


def to_snake(s: str) -> str:
    """``balanceOf`` -> ``balance_of``; ``tokens2`` -> ``tokens_2``"""
    s = s.strip()
    out = []
    n = len(s)
    for i, c in enumerate(s):
        upper, lower, digit = _is_upper(c), _is_lower(c), _is_digit(c)
        if upper:
            c = c.lower()
        if i + 1 < n:
            nxt = s[i + 1]
            n_upper, n_lower, n_digit = _is_upper(nxt), _is_lower(nxt), _is_digit(nxt)
            if (upper and (n_lower or n_digit)) or (lower and (n_upper or n_digit)) or (digit and (n_upper or n_lower)):
                if upper and n_lower and i > 0 and _is_upper(s[i - 1]):
                    out.append("_")
                out.append(c)
                if lower or digit or n_digit:
                    out.append("_")
                continue
        out.append("_" if c in _SEPARATORS else c)
    return "".join(out)


def identity(s: str) -> str:
    return s


def upper_first(s: str) -> str:
    return s[:1].upper() + s[1:]


GO_KEYWORDS = frozenset(
    (
        "break", "case", "chan", "const", "continue", "default", "defer", "else",
        "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
        "map", "package", "range", "return", "select", "struct", "switch", "type", "var",
    )
)


def go_identifier(name: str, reserved: Iterable[str] = ()) -> str:
    """Append ``_`` to Go keywords and to names in ``reserved`` (receivers, locals, imports)."""
    taken = GO_KEYWORDS.union(reserved)
    while name in taken:
        name += "_"
    return name


def sanitize_contract_name(name: str) -> str:
    """Strip non-word characters and capitalise: ``Sample Contract`` -> ``SampleContract``."""
    cleaned = _NON_WORD.sub("", name)
    if not cleaned:
        raise ManifestError(f"contract name {name!r} has no usable characters", path="name")
    return upper_first(cleaned)


def python_package_name(manifest_name: str) -> str:
    """``Sample Contract`` -> ``sample_contract``"""
    return manifest_name.lower().replace(" ", "_")


def kebab_folder_name(manifest_name: str) -> str:
    """``Sample Contract`` -> ``sample-contract``"""
    return "-".join(_NON_WORD_RUN.split(manifest_name)).lower()


__all__ = [
    "NameConverter",
    "to_upper_camel",
    "to_lower_camel",
    "to_snake",
    "identity",
    "upper_first",
    "GO_KEYWORDS",
    "go_identifier",
    "sanitize_contract_name",
    "python_package_name",
    "kebab_folder_name",
]

"""
Per-language type & name mapping
================================

Every (language, mode) pair has one `TypeMapper`: a frozen value holding the
ParamType -> type-spelling table, the method-name case convention and, for
off-chain SDKs, the tables used to wrap arguments and unwrap RPC results.

Tables are authoritative per language. They are not expected to agree with
each other: the Python unwrap table has a ``Void`` row, the Java tables do
not (Java renders void methods without a return statement), and TypeScript
leaves unwrapping to the runtime parser entirely.

    mapper = get_mapper(Language.JAVA, SdkMode.OFFCHAIN)
    mapper.map_type(ParamType.INTEGER)      # 'BigInteger'
    mapper.return_type(ParamType.ARRAY)     # 'List<StackItem>'
    mapper.wrap("Hash160")                  # 'ContractParameter.hash160'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping

from ..errors import UnmappedTypeError, UnsupportedTargetError
from ..manifest.model import ParamType
from . import naming
from .targets import Language, SdkMode, parse_target

P = ParamType


@dataclass(frozen=True, eq=False)
class TypeMapper:
    language: Language
    mode: SdkMode
    types: Mapping[ParamType, str]
    convert_name: naming.NameConverter
    # return spellings that differ from the parameter spelling
    return_types: Mapping[ParamType, str] = field(default_factory=dict)
    unwrap_table: Mapping[str, str] = field(default_factory=dict)
    wrap_table: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for typ in ParamType:
            if not self.types.get(typ):
                raise UnmappedTypeError(self.language.value, self.mode.value, typ.value)
        object.__setattr__(self, "types", MappingProxyType(dict(self.types)))

    def map_type(self, typ: ParamType) -> str:
        try:
            return self.types[typ]
        except KeyError:
            raise UnmappedTypeError(self.language.value, self.mode.value, str(typ)) from None

    def map_method_name(self, name: str) -> str:
        return self.convert_name(name)

    def return_type(self, typ: ParamType) -> str:
        return self.return_types.get(typ) or self.map_type(typ)

    def unwrap(self, type_abi: str) -> str:
        return self._lookup(self.unwrap_table, type_abi, "unwrap")

    def wrap(self, type_abi: str) -> str:
        return self._lookup(self.wrap_table, type_abi, "wrap")

    def _lookup(self, table: Mapping[str, str], type_abi: str, kind: str) -> str:
        try:
            return table[type_abi]
        except KeyError:
            raise UnmappedTypeError(self.language.value, self.mode.value, type_abi, table=kind) from None


# ---------------------------------------------------------------------------
# Go (neo-go interop / rpcbinding)
# ---------------------------------------------------------------------------

# Go has no spelling for "no result"; renderers drop the result clause when
# the ABI return type is Void, so the Void row is only a placeholder.
_GO_ONCHAIN_TYPES = {
    P.ANY: "any",
    P.BOOLEAN: "bool",
    P.INTEGER: "int",
    P.BYTE_ARRAY: "[]byte",
    P.STRING: "string",
    P.HASH160: "interop.Hash160",
    P.HASH256: "interop.Hash256",
    P.PUBLIC_KEY: "interop.PublicKey",
    P.ARRAY: "[]any",
    P.MAP: "map[string]any",
    P.INTEROP_INTERFACE: "interop.Interface",
    P.VOID: "void",
}

_GO_OFFCHAIN_TYPES = {
    P.ANY: "any",
    P.BOOLEAN: "bool",
    P.INTEGER: "*big.Int",
    P.BYTE_ARRAY: "[]byte",
    P.STRING: "string",
    P.HASH160: "util.Uint160",
    P.HASH256: "util.Uint256",
    P.PUBLIC_KEY: "*keys.PublicKey",
    P.ARRAY: "[]any",
    P.MAP: "*stackitem.Map",
    P.INTEROP_INTERFACE: "any",
    P.VOID: "void",
}

_GO_OFFCHAIN_RETURNS = {
    P.ANY: "stackitem.Item",
    P.ARRAY: "[]stackitem.Item",
    P.INTEROP_INTERFACE: "[]stackitem.Item",
}

_GO_UNWRAP = {
    "Any": "unwrap.Item",
    "Boolean": "unwrap.Bool",
    "Integer": "unwrap.BigInt",
    "ByteArray": "unwrap.Bytes",
    "String": "unwrap.UTF8String",
    "Hash160": "unwrap.Uint160",
    "Hash256": "unwrap.Uint256",
    "PublicKey": "unwrap.PublicKey",
    "Array": "unwrap.Array",
    "Map": "unwrap.Map",
    "InteropInterface": "unwrap.SessionIterator",
    "Void": "unwrap.Nothing",
}

# ---------------------------------------------------------------------------
# Python (neo3-boa on-chain, neo-mamba off-chain)
# ---------------------------------------------------------------------------

_PY_ONCHAIN_TYPES = {
    P.ANY: "Any",
    P.BOOLEAN: "bool",
    P.INTEGER: "int",
    P.BYTE_ARRAY: "bytes",
    P.STRING: "str",
    P.HASH160: "UInt160",
    P.HASH256: "UInt256",
    P.PUBLIC_KEY: "ECPoint",
    P.ARRAY: "list",
    P.MAP: "dict",
    P.INTEROP_INTERFACE: "Any",
    P.VOID: "None",
}

_PY_OFFCHAIN_TYPES = {
    P.ANY: "noderpc.ContractParameter",
    P.BOOLEAN: "bool",
    P.INTEGER: "int | types.BigInteger",
    P.BYTE_ARRAY: "bytes | serialization.ISerializable",
    P.STRING: "str",
    P.HASH160: "types.UInt160 | NeoAddress",
    P.HASH256: "types.UInt256",
    P.PUBLIC_KEY: "cryptography.ECPoint",
    P.ARRAY: "list",
    P.MAP: "dict",
    P.INTEROP_INTERFACE: "noderpc.ContractParameter",
    P.VOID: "None",
}

_PY_OFFCHAIN_RETURNS = {
    P.INTEROP_INTERFACE: "list",
}

_PY_UNWRAP = {
    "Any": "unwrap.item",
    "InteropInterface": "unwrap.as_list",
    "Boolean": "unwrap.as_bool",
    "Integer": "unwrap.as_int",
    "ByteArray": "unwrap.as_bytes",
    "String": "unwrap.as_str",
    "Hash160": "unwrap.as_uint160",
    "Hash256": "unwrap.as_uint256",
    "PublicKey": "unwrap.as_public_key",
    "Array": "unwrap.as_list",
    "Map": "unwrap.as_dict",
    "Void": "unwrap.as_none",
}

# ---------------------------------------------------------------------------
# Java (neow3j devpack on-chain, neow3j SDK off-chain)
# ---------------------------------------------------------------------------

_JAVA_ONCHAIN_TYPES = {
    P.ANY: "Object",
    P.BOOLEAN: "boolean",
    P.INTEGER: "int",
    P.BYTE_ARRAY: "ByteString",
    P.STRING: "String",
    P.HASH160: "Hash160",
    P.HASH256: "Hash256",
    P.PUBLIC_KEY: "ECPoint",
    P.ARRAY: "List<Object>",
    P.MAP: "Map<Object, Object>",
    P.INTEROP_INTERFACE: "Object",
    P.VOID: "void",
}

_JAVA_OFFCHAIN_TYPES = {
    P.ANY: "Object",
    P.BOOLEAN: "boolean",
    P.INTEGER: "BigInteger",
    P.BYTE_ARRAY: "byte[]",
    P.STRING: "String",
    P.HASH160: "Hash160",
    P.HASH256: "Hash256",
    P.PUBLIC_KEY: "ECKeyPair.ECPublicKey",
    P.ARRAY: "List<?>",
    P.MAP: "Map<?, ?>",
    P.INTEROP_INTERFACE: "List<?>",
    P.VOID: "void",
}

_JAVA_OFFCHAIN_RETURNS = {
    P.ARRAY: "List<StackItem>",
    P.INTEROP_INTERFACE: "List<StackItem>",
    P.MAP: "Map<StackItem, StackItem>",
}

_JAVA_FIRST_ITEM = "response.getInvocationResult().getFirstStackItem()"

# No Void row: void methods render without reading the response.
_JAVA_UNWRAP = {
    "Any": f"{_JAVA_FIRST_ITEM}.getValue()",
    "InteropInterface": "response",
    "Boolean": f"{_JAVA_FIRST_ITEM}.getBoolean()",
    "Integer": f"{_JAVA_FIRST_ITEM}.getInteger()",
    "ByteArray": f"{_JAVA_FIRST_ITEM}.getByteArray()",
    "String": f"{_JAVA_FIRST_ITEM}.getString()",
    "Hash160": f"Hash160.fromAddress({_JAVA_FIRST_ITEM}.getAddress())",
    "Hash256": f"new Hash256(ArrayUtils.reverseArray({_JAVA_FIRST_ITEM}.getByteArray()))",
    "PublicKey": f"new ECKeyPair.ECPublicKey({_JAVA_FIRST_ITEM}.getHexString())",
    "Array": f"{_JAVA_FIRST_ITEM}.getList()",
    "Map": f"{_JAVA_FIRST_ITEM}.getMap()",
}

_JAVA_WRAP = {
    "Any": "ContractParameter.mapToContractParameter",
    "InteropInterface": "ContractParameter.any",
    "Boolean": "ContractParameter.bool",
    "Integer": "ContractParameter.integer",
    "ByteArray": "ContractParameter.byteArray",
    "String": "ContractParameter.string",
    "Hash160": "ContractParameter.hash160",
    "Hash256": "ContractParameter.hash256",
    "PublicKey": "ContractParameter.publicKey",
    "Array": "ContractParameter.array",
    "Map": "ContractParameter.map",
}

# ---------------------------------------------------------------------------
# C# (Neo devpack) and TypeScript (neon-dappkit)
# ---------------------------------------------------------------------------

_CSHARP_TYPES = {
    P.ANY: "object",
    P.BOOLEAN: "bool",
    P.INTEGER: "BigInteger",
    P.BYTE_ARRAY: "byte[]",
    P.STRING: "string",
    P.HASH160: "UInt160",
    P.HASH256: "UInt256",
    P.PUBLIC_KEY: "ECPoint",
    P.ARRAY: "object[]",
    P.MAP: "Map<object, object>",
    P.INTEROP_INTERFACE: "object",
    P.VOID: "void",
}

_TS_TYPES = {
    P.ANY: "any",
    P.BOOLEAN: "boolean",
    P.INTEGER: "number",
    P.BYTE_ARRAY: "string",
    P.STRING: "string",
    P.HASH160: "string",
    P.HASH256: "string",
    P.PUBLIC_KEY: "string",
    P.ARRAY: "any[]",
    P.MAP: "object",
    P.INTEROP_INTERFACE: "object",
    P.VOID: "void",
}


def _build_registry() -> Dict[tuple, TypeMapper]:
    L, M = Language, SdkMode
    mappers = [
        TypeMapper(L.GO, M.ONCHAIN, _GO_ONCHAIN_TYPES, naming.upper_first),
        TypeMapper(
            L.GO,
            M.OFFCHAIN,
            _GO_OFFCHAIN_TYPES,
            naming.upper_first,
            return_types=_GO_OFFCHAIN_RETURNS,
            unwrap_table=_GO_UNWRAP,
        ),
        TypeMapper(L.PYTHON, M.ONCHAIN, _PY_ONCHAIN_TYPES, naming.identity),
        TypeMapper(
            L.PYTHON,
            M.OFFCHAIN,
            _PY_OFFCHAIN_TYPES,
            naming.to_snake,
            return_types=_PY_OFFCHAIN_RETURNS,
            unwrap_table=_PY_UNWRAP,
        ),
        TypeMapper(L.JAVA, M.ONCHAIN, _JAVA_ONCHAIN_TYPES, naming.to_lower_camel),
        TypeMapper(
            L.JAVA,
            M.OFFCHAIN,
            _JAVA_OFFCHAIN_TYPES,
            naming.to_lower_camel,
            return_types=_JAVA_OFFCHAIN_RETURNS,
            unwrap_table=_JAVA_UNWRAP,
            wrap_table=_JAVA_WRAP,
        ),
        # one table per language for C# and TypeScript; only one flavour of
        # each is rendered (see cpm.codegen.generate)
        TypeMapper(L.CSHARP, M.ONCHAIN, _CSHARP_TYPES, naming.to_upper_camel),
        TypeMapper(L.CSHARP, M.OFFCHAIN, _CSHARP_TYPES, naming.to_upper_camel),
        TypeMapper(L.TYPESCRIPT, M.ONCHAIN, _TS_TYPES, naming.to_lower_camel),
        TypeMapper(L.TYPESCRIPT, M.OFFCHAIN, _TS_TYPES, naming.to_lower_camel),
    ]
    return {(m.language, m.mode): m for m in mappers}


MAPPERS: Mapping[tuple, TypeMapper] = MappingProxyType(_build_registry())


def get_mapper(language: Language | str, mode: SdkMode | str) -> TypeMapper:
    lang, md = parse_target(language, mode)
    try:
        return MAPPERS[(lang, md)]
    except KeyError:
        raise UnsupportedTargetError(lang.value, md.value) from None


__all__ = ["TypeMapper", "MAPPERS", "get_mapper"]

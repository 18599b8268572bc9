from __future__ import annotations

import pytest

from cpm.codegen import MAPPERS, Language, SdkMode, TypeMapper, get_mapper
from cpm.codegen import naming
from cpm.errors import UnmappedTypeError, UnsupportedTargetError
from cpm.manifest import ParamType


def test_registry_covers_every_language_and_mode():
    assert set(MAPPERS) == {(lang, mode) for lang in Language for mode in SdkMode}


@pytest.mark.parametrize(
    "language, mode, typ, expected",
    [
        ("go", "onchain", ParamType.HASH160, "interop.Hash160"),
        ("go", "offchain", ParamType.INTEGER, "*big.Int"),
        ("python", "onchain", ParamType.PUBLIC_KEY, "ECPoint"),
        ("python", "offchain", ParamType.HASH160, "types.UInt160 | NeoAddress"),
        ("java", "onchain", ParamType.BYTE_ARRAY, "ByteString"),
        ("java", "offchain", ParamType.INTEGER, "BigInteger"),
        ("csharp", "onchain", ParamType.ARRAY, "object[]"),
        ("ts", "offchain", ParamType.INTEGER, "number"),
    ],
)
def test_type_spellings(language, mode, typ, expected):
    assert get_mapper(language, mode).map_type(typ) == expected


def test_return_overrides_fall_back_to_parameter_spelling():
    go = get_mapper(Language.GO, SdkMode.OFFCHAIN)
    assert go.return_type(ParamType.ARRAY) == "[]stackitem.Item"
    assert go.return_type(ParamType.STRING) == "string"
    java = get_mapper(Language.JAVA, SdkMode.OFFCHAIN)
    assert java.return_type(ParamType.MAP) == "Map<StackItem, StackItem>"
    assert java.map_type(ParamType.MAP) == "Map<?, ?>"


@pytest.mark.parametrize(
    "language, mode, expected",
    [
        ("go", "onchain", "BalanceOf"),
        ("python", "onchain", "balanceOf"),
        ("python", "offchain", "balance_of"),
        ("java", "offchain", "balanceOf"),
        ("csharp", "onchain", "BalanceOf"),
        ("ts", "offchain", "balanceOf"),
    ],
)
def test_method_name_conventions(language, mode, expected):
    assert get_mapper(language, mode).map_method_name("balanceOf") == expected


def test_unwrap_and_wrap_tables():
    assert get_mapper("go", "offchain").unwrap("InteropInterface") == "unwrap.SessionIterator"
    assert get_mapper("python", "offchain").unwrap("Void") == "unwrap.as_none"
    java = get_mapper("java", "offchain")
    assert java.wrap("Hash160") == "ContractParameter.hash160"
    assert java.unwrap("InteropInterface") == "response"


def test_java_tables_have_no_void_row():
    java = get_mapper("java", "offchain")
    with pytest.raises(UnmappedTypeError) as ei:
        java.unwrap("Void")
    assert ei.value.table == "unwrap"
    with pytest.raises(UnmappedTypeError):
        java.wrap("Void")


def test_onchain_mappers_have_no_unwrap_table():
    with pytest.raises(UnmappedTypeError):
        get_mapper("go", "onchain").unwrap("Integer")


def test_incomplete_table_is_rejected_at_construction():
    table = {t: "x" for t in ParamType if t is not ParamType.MAP}
    with pytest.raises(UnmappedTypeError) as ei:
        TypeMapper(Language.GO, SdkMode.ONCHAIN, table, naming.identity)
    assert ei.value.type_name == "Map"


def test_types_table_is_read_only():
    mapper = get_mapper("go", "onchain")
    with pytest.raises(TypeError):
        mapper.types[ParamType.ANY] = "interface{}"  # type: ignore[index]


@pytest.mark.parametrize("language, mode", [("rust", "onchain"), ("go", "sideways")])
def test_unknown_targets(language, mode):
    with pytest.raises(UnsupportedTargetError):
        get_mapper(language, mode)

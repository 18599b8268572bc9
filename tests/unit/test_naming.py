from __future__ import annotations

import pytest

from cpm.codegen import naming
from cpm.errors import ManifestError


@pytest.mark.parametrize(
    "src, upper, lower, snake",
    [
        ("balanceOf", "BalanceOf", "balanceOf", "balance_of"),
        ("balance_of", "BalanceOf", "balanceOf", "balance_of"),
        ("getBlockHash", "GetBlockHash", "getBlockHash", "get_block_hash"),
        ("symbol", "Symbol", "symbol", "symbol"),
        ("tokens2", "Tokens2", "tokens2", "tokens_2"),
        ("add_2", "Add2", "add2", "add_2"),
    ],
)
def test_case_conversions(src, upper, lower, snake):
    assert naming.to_upper_camel(src) == upper
    assert naming.to_lower_camel(src) == lower
    assert naming.to_snake(src) == snake


def test_separators_start_new_words():
    assert naming.to_upper_camel("my-contract.name") == "MyContractName"
    assert naming.to_lower_camel("Set Owner") == "setOwner"


def test_identity_and_upper_first():
    assert naming.identity("balanceOf") == "balanceOf"
    assert naming.upper_first("transfer") == "Transfer"
    assert naming.upper_first("") == ""


@pytest.mark.parametrize(
    "name, expected",
    [("Sample Contract", "SampleContract"), ("my-token!", "Mytoken"), ("NEO", "NEO")],
)
def test_sanitize_contract_name(name, expected):
    assert naming.sanitize_contract_name(name) == expected


def test_sanitize_contract_name_rejects_symbol_only_names():
    with pytest.raises(ManifestError):
        naming.sanitize_contract_name("--- !")


def test_folder_names():
    assert naming.python_package_name("Sample Contract") == "sample_contract"
    assert naming.kebab_folder_name("Sample Contract") == "sample-contract"
    assert naming.kebab_folder_name("My  Cool.Token") == "my-cool-token"


@pytest.mark.parametrize(
    "name, reserved, expected",
    [("amount", (), "amount"), ("type", (), "type_"), ("range", (), "range_"), ("c", ("c",), "c_"),
     ("c", ("c", "c_"), "c__")],
)
def test_go_identifier(name, reserved, expected):
    assert naming.go_identifier(name, reserved) == expected

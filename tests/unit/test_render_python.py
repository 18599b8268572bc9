from __future__ import annotations

from pathlib import PurePosixPath

from . import by_name


def test_onchain_package_layout(render):
    files = render("python", "onchain")
    assert [f.path for f in files] == [
        PurePosixPath("sample_contract/__init__.py"),
        PurePosixPath("sample_contract/contract.py"),
    ]
    assert files[0].content == "from .contract import SampleContract\n"


def test_onchain_contract_stubs(render):
    content = by_name(render("python", "onchain"), "contract.py").content
    assert "@contract('0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5')\nclass SampleContract:\n" in content
    assert (
        "    @staticmethod\n"
        "    def transfer(from_: UInt160, to: UInt160, amount: int, data: Any) -> bool:\n"
        "        pass\n"
    ) in content
    assert "    def balanceOf(account: UInt160) -> int:\n" in content
    assert "    def update(nefFile: bytes, manifest: str) -> None:\n" in content


def test_onchain_overload_names(render):
    content = by_name(render("python", "onchain"), "contract.py").content
    for name in ("def add(", "def add_2(", "def add_3(", "def add__2("):
        assert name in content
    assert "    def add_3(a: int, b: int, c: int) -> int:\n" in content
    assert "    def add__2(x: int, y: int) -> int:\n" in content


def test_offchain_package_layout(render):
    files = render("python", "offchain")
    assert [f.path for f in files] == [
        PurePosixPath("sample_contract/__init__.py"),
        PurePosixPath("sample_contract/contract_off_chain_sdk.py"),
    ]
    assert files[0].content == ""


def test_offchain_class(render):
    content = by_name(render("python", "offchain"), "contract_off_chain_sdk.py").content
    assert content.startswith("from typing import AsyncIterator\n\nfrom neo3 import vm\n")
    assert "class SampleContract(GenericContract):" in content
    assert "ChainFacade.test_invoke to preview" in content
    assert 'super().__init__(types.UInt160.from_string("0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5"))' in content


def test_offchain_method_builds_script_and_unwraps(render):
    content = by_name(render("python", "offchain"), "contract_off_chain_sdk.py").content
    assert (
        "    def transfer(self, from_: types.UInt160 | NeoAddress, to: types.UInt160 | NeoAddress, "
        "amount: int | types.BigInteger, data: noderpc.ContractParameter) -> ContractMethodResult[bool]:\n"
        "        from_ = _check_address_and_convert(from_)\n"
        "        to = _check_address_and_convert(to)\n"
    ) in content
    assert '.emit_contract_call_with_args(self.hash, "transfer", [from_, to, amount, data])' in content
    assert "return ContractMethodResult(script, unwrap.as_bool)" in content
    assert '.emit_contract_call(self.hash, "symbol")' in content


def test_offchain_names_are_snake_case(render):
    content = by_name(render("python", "offchain"), "contract_off_chain_sdk.py").content
    assert "    def balance_of(self, account: types.UInt160 | NeoAddress) -> ContractMethodResult[int | types.BigInteger]:" in content
    assert "    def get_block_hash(self, index: int | types.BigInteger) -> ContractMethodResult[types.UInt256]:" in content
    assert "    def update(self, nef_file" not in content
    assert "    def update(self, nefFile: bytes | serialization.ISerializable, manifest: str) -> ContractMethodResult[None]:" in content
    assert "ContractMethodResult(script, unwrap.as_none)" in content


def test_offchain_iterator_is_async_generator(render):
    content = by_name(render("python", "offchain"), "contract_off_chain_sdk.py").content
    assert (
        "    async def tokens(self, client: noderpc.NeoRpcClient, items_per_request: int = 20) -> AsyncIterator[list]:"
    ) in content
    assert "await client.traverse_iterator(res.session_id, iterator.id_, items_per_request)" in content
    assert "can not have an iterator inside another iterator" in content
    assert "            yield page\n" in content


def test_offchain_without_iterators_skips_typing_import(render):
    from cpm.manifest import Manifest, Method, ParamType

    m = Manifest(name="Plain", methods=(Method("n", return_type=ParamType.INTEGER, safe=True),))
    content = by_name(render("python", "offchain", m), "contract_off_chain_sdk.py").content
    assert content.startswith("from neo3 import vm\n")
    assert "AsyncIterator" not in content


def test_generated_python_compiles(render):
    for mode in ("onchain", "offchain"):
        for f in render("python", mode):
            compile(f.content, str(f.path), "exec")

"""
Python SDKs.

Both flavours produce a package directory named after the contract::

    sample_contract/
        __init__.py
        contract.py                 # on-chain, neo3-boa
        contract_off_chain_sdk.py   # off-chain, neo-mamba

The on-chain package is imported from another neo3-boa contract
(``from sample_contract import SampleContract``). The off-chain class is a
neo-mamba ``GenericContract``: every method returns a
``ContractMethodResult`` that the caller hands to ``ChainFacade.invoke`` or
``ChainFacade.test_invoke``, so submit vs. preview is decided at the call
site. Iterator methods are async generators driving an RPC client directly.
"""

from __future__ import annotations

import keyword
from pathlib import PurePosixPath
from typing import List

from ..mappers import TypeMapper
from ..model import Argument, ContractTemplate, MethodTemplate
from ..naming import python_package_name
from .common import RenderedFile, fill

ITEMS_PER_REQUEST = 20

_ONCHAIN_TMPL = """from boa3.builtin.interop.contract import call_contract
from boa3.builtin.type import UInt160, UInt256, ECPoint
from boa3.builtin import contract
from typing import cast, Any


@contract('{hash}')
class {contract_name}:
{methods}"""

_ONCHAIN_METHOD_TMPL = """
    @staticmethod
    def {name}({params}) -> {ret}:
        pass
"""

_OFFCHAIN_TMPL = '''{typing_import}from neo3 import vm
from neo3.api import noderpc
from neo3.api.helpers import unwrap
from neo3.api.wrappers import GenericContract, ContractMethodResult, _check_address_and_convert
from neo3.core import types, cryptography, serialization
from neo3.wallet.types import NeoAddress


class {contract_name}(GenericContract):
    """
    Methods return a ContractMethodResult. Pass it to ChainFacade.invoke to
    submit a transaction or to ChainFacade.test_invoke to preview the result.
    """

    def __init__(self):
        super().__init__(types.UInt160.from_string("{hash}"))
{methods}'''

_OFFCHAIN_METHOD_TMPL = """
    def {name}(self{params}) -> ContractMethodResult[{ret}]:
{converts}        script = (
            vm.ScriptBuilder()
            {emit}
            .to_array()
        )
        return ContractMethodResult(script, {unwrap})
"""

_OFFCHAIN_ITERATOR_TMPL = """
    async def {name}(self, client: noderpc.NeoRpcClient{params}, items_per_request: int = {items_per_request}) -> AsyncIterator[{ret}]:
{converts}        script = (
            vm.ScriptBuilder()
            {emit}
            .to_array()
        )
        res = await client.invoke_script(script)
        if res.state != "HALT" or len(res.stack) == 0 or not isinstance(res.stack[0], noderpc.InteropStackItem):
            raise ValueError(res.exception or "unrecognized response")
        iterator = res.stack[0]
        while True:
            page = await client.traverse_iterator(res.session_id, iterator.id_, items_per_request)
            if len(page) == 0:
                break
            if isinstance(page[0], noderpc.InteropStackItem):
                raise ValueError(res.exception or "can not have an iterator inside another iterator")
            yield page
"""


def _arg_name(a: Argument) -> str:
    return a.name + "_" if keyword.iskeyword(a.name) else a.name


def _params(args) -> str:
    return ", ".join(f"{_arg_name(a)}: {a.type}" for a in args)


def _onchain_method(m: MethodTemplate) -> str:
    return fill(
        _ONCHAIN_METHOD_TMPL,
        "python/onchain/method",
        name=m.name,
        params=_params(m.arguments),
        ret=m.return_type,
    )


def render_onchain(ctr: ContractTemplate, mapper: TypeMapper, manifest_name: str) -> List[RenderedFile]:
    pkg = PurePosixPath(python_package_name(manifest_name))
    contract = fill(
        _ONCHAIN_TMPL,
        "python/onchain",
        hash=ctr.hash,
        contract_name=ctr.contract_name,
        methods="".join(_onchain_method(m) for m in ctr.methods),
    )
    return [
        RenderedFile(pkg / "__init__.py", f"from .contract import {ctr.contract_name}\n"),
        RenderedFile(pkg / "contract.py", contract),
    ]


def _emit(m: MethodTemplate) -> str:
    if m.arguments:
        names = ", ".join(_arg_name(a) for a in m.arguments)
        return f'.emit_contract_call_with_args(self.hash, "{m.name_abi}", [{names}])'
    return f'.emit_contract_call(self.hash, "{m.name_abi}")'


def _converts(m: MethodTemplate) -> str:
    return "".join(
        f"        {_arg_name(a)} = _check_address_and_convert({_arg_name(a)})\n"
        for a in m.arguments
        if a.type_abi == "Hash160"
    )


def _offchain_method(m: MethodTemplate, mapper: TypeMapper) -> str:
    values = dict(
        name=m.name,
        params="".join(f", {_arg_name(a)}: {a.type}" for a in m.arguments),
        ret=m.return_type,
        converts=_converts(m),
        emit=_emit(m),
    )
    if m.is_iterator:
        return fill(
            _OFFCHAIN_ITERATOR_TMPL,
            "python/offchain/iterator",
            items_per_request=ITEMS_PER_REQUEST,
            **values,
        )
    return fill(_OFFCHAIN_METHOD_TMPL, "python/offchain/method", unwrap=mapper.unwrap(m.return_type_abi), **values)


def render_offchain(ctr: ContractTemplate, mapper: TypeMapper, manifest_name: str) -> List[RenderedFile]:
    pkg = PurePosixPath(python_package_name(manifest_name))
    has_iterators = any(m.is_iterator for m in ctr.methods)
    sdk = fill(
        _OFFCHAIN_TMPL,
        "python/offchain",
        typing_import="from typing import AsyncIterator\n\n" if has_iterators else "",
        contract_name=ctr.contract_name,
        hash=ctr.hash,
        methods="".join(_offchain_method(m, mapper) for m in ctr.methods),
    )
    return [
        RenderedFile(pkg / "__init__.py", ""),
        RenderedFile(pkg / "contract_off_chain_sdk.py", sdk),
    ]


__all__ = ["render_onchain", "render_offchain", "ITEMS_PER_REQUEST"]

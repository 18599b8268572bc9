"""C# on-chain SDK for the Neo devpack (``Contract.Call`` stubs)."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import List

from ..mappers import TypeMapper
from ..model import ContractTemplate, MethodTemplate
from .common import RenderedFile, fill, join_args

_TMPL = """using Neo;
using Neo.Cryptography.ECC;
using Neo.SmartContract;
using Neo.SmartContract.Framework;
using Neo.SmartContract.Framework.Services;
using Neo.SmartContract.Framework.Attributes;

namespace cpm {{
    public class {contract_name}  {{

        [InitialValue("{hash}", ContractParameterType.Hash160)]
        static readonly UInt160 ScriptHash;
{methods}
   }}
}}
"""

_METHOD_TMPL = """
        public static {ret} {name}({params}) {{
            {body};
        }}
"""


def _method(m: MethodTemplate) -> str:
    args = "".join(", " + a.name for a in m.arguments) or ", new object[0]"
    call = f'Contract.Call(ScriptHash, "{m.name_abi}", CallFlags.All{args})'
    body = call if m.is_void else f"return ({m.return_type}) {call}"
    return fill(
        _METHOD_TMPL,
        "csharp/method",
        ret=m.return_type,
        name=m.name,
        params=join_args(m.arguments, "{type} {name}"),
        body=body,
    )


def render_onchain(ctr: ContractTemplate, mapper: TypeMapper, manifest_name: str) -> List[RenderedFile]:
    content = fill(
        _TMPL,
        "csharp",
        contract_name=ctr.contract_name,
        hash=ctr.hash,
        methods="".join(_method(m) for m in ctr.methods),
    )
    return [RenderedFile(PurePosixPath(file_name(ctr.contract_name)), content)]


def file_name(contract_name: str) -> str:
    return contract_name + ".cs"


__all__ = ["render_onchain", "file_name"]

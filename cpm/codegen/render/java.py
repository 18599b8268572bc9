"""
Java SDKs for neow3j.

One ``<Contract>.java`` per flavour. The package statement is left as a
``<REPLACE_ME>`` placeholder for the user to fill in, since the target
project layout is not known here.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import List

from ..mappers import TypeMapper
from ..model import ContractTemplate, MethodTemplate
from ..naming import upper_first
from .common import RenderedFile, fill, join_args

ITEMS_PER_REQUEST = 20

_ONCHAIN_TMPL = """package <REPLACE_ME>;

import io.neow3j.devpack.*;
import io.neow3j.devpack.contracts.ContractInterface;


public class {contract_name} extends ContractInterface {{

    static final String scriptHash = "{hash}";

    public {contract_name}() {{
       super(scriptHash);
    }}
{methods}}}
"""

_ONCHAIN_METHOD_TMPL = """
    public native {ret} {name_abi}({params});
"""

_OFFCHAIN_TMPL = """package <REPLACE_ME>;

import io.neow3j.contract.Iterator;
import io.neow3j.contract.SmartContract;
import io.neow3j.crypto.ECKeyPair;
import io.neow3j.protocol.Neow3j;
import io.neow3j.protocol.Neow3jConfig;
import io.neow3j.protocol.core.response.NeoInvokeFunction;
import io.neow3j.protocol.core.stackitem.StackItem;
import io.neow3j.protocol.http.HttpService;
import io.neow3j.transaction.AccountSigner;
import io.neow3j.transaction.TransactionBuilder;
import io.neow3j.types.ContractParameter;
import io.neow3j.types.Hash160;
import io.neow3j.types.Hash256;
import io.neow3j.types.StackItemType;
import io.neow3j.utils.ArrayUtils;

import java.io.IOException;
import java.math.BigInteger;
import java.util.ArrayList;
import java.util.Arrays;
import java.util.Collections;
import java.util.List;
import java.util.Map;

public class {contract_name} {{
	Neow3j neow3j;
	Hash160 scriptHash;
	SmartContract smartContract;

	private void setScriptHash(Hash160 scriptHash) {{
		this.scriptHash = scriptHash;
	}}

	private void setSmartContract(SmartContract smartContract) {{
		this.smartContract = smartContract;
	}}

	public {contract_name}(String rpcAddress, Neow3jConfig neow3jConfig) {{
		neow3j = Neow3j.build(new HttpService(rpcAddress), neow3jConfig);
		setScriptHash(new Hash160("{hash}"));
		setSmartContract(new SmartContract(scriptHash, neow3j));
	}}
{methods}}}
"""

_INVOKE_TMPL = """
	public TransactionBuilder {name}({params}) {{
		return smartContract.invokeFunction("{name_abi}"{wrapped});
	}}
"""

_TEST_INVOKE_TMPL = """
	public {ret} {name}({params}AccountSigner... signers) {{
		NeoInvokeFunction response = null;
		try {{
			response = smartContract.callInvokeFunction(
				"{name_abi}",
				{param_list}signers
			);
		}} catch (IOException e) {{
			throw new RuntimeException(e);
		}}
		return {unwrap};
	}}
"""

_TEST_INVOKE_VOID_TMPL = """
	public void {name}({params}AccountSigner... signers) {{
		try {{
			smartContract.callInvokeFunction(
				"{name_abi}",
				{param_list}signers
			);
		}} catch (IOException e) {{
			throw new RuntimeException(e);
		}}
	}}
"""

_TEST_ITERATOR_TMPL = """
	public {ret} {name}({params}int itemsPerRequest, AccountSigner... signers) {{
		List<StackItem> response = new ArrayList<>();
		try {{
			Iterator<StackItem> iterator = smartContract.callFunctionReturningIterator(
				"{name_abi}",
				{param_list}signers
			);
			List<StackItem> page = iterator.traverse(itemsPerRequest);
			while (!page.isEmpty()) {{
				for (StackItem item : page) {{
					if (item.getType() == StackItemType.INTEROP_INTERFACE) {{
						throw new IllegalStateException("can not have an iterator inside another iterator");
					}}
				}}
				response.addAll(page);
				page = iterator.traverse(itemsPerRequest);
			}}
			iterator.terminateSession();
		}} catch (IOException e) {{
			throw new RuntimeException(e);
		}}
		return {unwrap};
	}}

	public {ret} {name}({params}AccountSigner... signers) {{
		return {name}({arg_names}{items_per_request}, signers);
	}}
"""


def _onchain_method(m: MethodTemplate) -> str:
    return fill(
        _ONCHAIN_METHOD_TMPL,
        "java/onchain/method",
        ret=m.return_type,
        name_abi=m.name_abi,
        params=join_args(m.arguments, "{type} {name}"),
    )


def render_onchain(ctr: ContractTemplate, mapper: TypeMapper, manifest_name: str) -> List[RenderedFile]:
    content = fill(
        _ONCHAIN_TMPL,
        "java/onchain",
        contract_name=ctr.contract_name,
        hash=ctr.hash_le,
        methods="".join(_onchain_method(m) for m in ctr.methods),
    )
    return [RenderedFile(PurePosixPath(file_name(ctr.contract_name)), content)]


def _wrapped(m: MethodTemplate, mapper: TypeMapper) -> List[str]:
    return [f"{mapper.wrap(a.type_abi)}({a.name})" for a in m.arguments]


def _param_list(m: MethodTemplate, mapper: TypeMapper) -> str:
    """Argument list expression for ``callInvokeFunction``, trailing comma included."""
    wrapped = _wrapped(m, mapper)
    if not wrapped:
        return "Collections.<ContractParameter>emptyList(),\n\t\t\t\t" if m.is_iterator else ""
    opener = "Collections.singletonList(" if len(wrapped) == 1 else "Arrays.asList("
    items = ",".join(f"\n\t\t\t\t\t{w}" for w in wrapped)
    return f"{opener}{items}\n\t\t\t\t),\n\t\t\t\t"


def _invoke_method(m: MethodTemplate, mapper: TypeMapper) -> str:
    wrapped = "".join(f",\n\t\t\t{w}" for w in _wrapped(m, mapper))
    if wrapped:
        wrapped += "\n\t\t"
    return fill(
        _INVOKE_TMPL,
        "java/offchain/invoke",
        name=m.name,
        name_abi=m.name_abi,
        params=join_args(m.arguments, "{type} {name}"),
        wrapped=wrapped,
    )


def _test_method(m: MethodTemplate, mapper: TypeMapper) -> str:
    values = dict(
        name=m.name if m.safe else "test" + upper_first(m.name),
        name_abi=m.name_abi,
        params=join_args(m.arguments, "{type} {name}, ", sep=""),
        param_list=_param_list(m, mapper),
    )
    if m.is_iterator:
        return fill(
            _TEST_ITERATOR_TMPL,
            "java/offchain/iterator",
            ret=m.return_type,
            unwrap=mapper.unwrap(m.return_type_abi),
            arg_names=join_args(m.arguments, "{name}, ", sep=""),
            items_per_request=ITEMS_PER_REQUEST,
            **values,
        )
    if m.is_void:
        return fill(_TEST_INVOKE_VOID_TMPL, "java/offchain/test", **values)
    return fill(
        _TEST_INVOKE_TMPL,
        "java/offchain/test",
        ret=m.return_type,
        unwrap=mapper.unwrap(m.return_type_abi),
        **values,
    )


def render_offchain(ctr: ContractTemplate, mapper: TypeMapper, manifest_name: str) -> List[RenderedFile]:
    parts = []
    for m in ctr.methods:
        if not m.safe:
            parts.append(_invoke_method(m, mapper))
        parts.append(_test_method(m, mapper))
    content = fill(
        _OFFCHAIN_TMPL,
        "java/offchain",
        contract_name=ctr.contract_name,
        hash=ctr.hash,
        methods="".join(parts),
    )
    return [RenderedFile(PurePosixPath(file_name(ctr.contract_name)), content)]


def file_name(contract_name: str) -> str:
    return contract_name + ".java"


__all__ = ["render_onchain", "render_offchain", "file_name", "ITEMS_PER_REQUEST"]

"""
Go SDKs for neo-go.

On-chain output is a package of thin ``neogointernal.CallWithToken`` shims
to be compiled into another contract; off-chain output follows neo-go's
rpcbinding layout (``ContractReader`` for safe calls, ``Contract`` for
transactions) on top of an ``Invoker``/``Actor`` pair.
"""

from __future__ import annotations

import re
from dataclasses import replace
from pathlib import PurePosixPath
from typing import List, Tuple

from ...hashes import ScriptHash
from ..mappers import TypeMapper
from ..model import Argument, ContractTemplate, MethodTemplate
from ..naming import go_identifier
from .common import RenderedFile, fill, join_args

_CALL_FLAGS_SAFE = "contract.ReadOnly"
_CALL_FLAGS_ALL = "contract.All"

# identifiers the rendered code already uses: receiver, locals, package
# names and predeclared types a parameter must not shadow
_RESERVED = frozenset(
    (
        "c", "itemsPerRequest", "sess", "iter", "err", "items", "page", "item",
        "Hash", "contract", "interop", "neogointernal", "errors", "big", "uuid",
        "transaction", "keys", "result", "unwrap", "util", "stackitem",
        "any", "bool", "byte", "error", "int", "string", "nil", "append", "len",
    )
)

# ---------------------------------------------------------------------------
# on-chain
# ---------------------------------------------------------------------------

_ONCHAIN_TMPL = """// Code generated by cpm. DO NOT EDIT.

// Package {package} contains wrappers for {manifest_name} contract.
package {package}

import (
{imports}
)

// Hash contains contract hash in big-endian form.
const Hash = "{hash_bytes}"
{methods}"""

_ONCHAIN_METHOD_TMPL = """
// {name} {comment}
func {name}({params}){ret} {{
	{body}
}}
"""


def _go_string_bytes(data: bytes) -> str:
    return "".join(f"\\x{b:02x}" for b in data)


def _args(m: MethodTemplate) -> Tuple[Argument, ...]:
    return tuple(replace(a, name=go_identifier(a.name, _RESERVED)) for a in m.arguments)


def _call_args(m: MethodTemplate) -> str:
    return "".join(", " + a.name for a in _args(m))


def _onchain_method(m: MethodTemplate) -> str:
    flags = _CALL_FLAGS_SAFE if m.safe else _CALL_FLAGS_ALL
    params = join_args(_args(m), "{name} {type}")
    call = f'Hash, "{m.name_abi}", int({flags}){_call_args(m)}'
    if m.is_void:
        ret = ""
        body = f"neogointernal.CallWithTokenNoRet({call})"
    elif m.return_type == "any":
        ret = " any"
        body = f"return neogointernal.CallWithToken({call})"
    else:
        ret = f" {m.return_type}"
        body = f"return neogointernal.CallWithToken({call}).({m.return_type})"
    return fill(
        _ONCHAIN_METHOD_TMPL,
        "go/onchain/method",
        name=m.name,
        comment=m.comment,
        params=params,
        ret=ret,
        body=body,
    )


def render_onchain(ctr: ContractTemplate, mapper: TypeMapper, manifest_name: str) -> List[RenderedFile]:
    methods = "".join(_onchain_method(m) for m in ctr.methods)
    imports = []
    if "interop." in methods:
        imports.append('"github.com/nspcc-dev/neo-go/pkg/interop"')
    imports.append('"github.com/nspcc-dev/neo-go/pkg/interop/contract"')
    imports.append('"github.com/nspcc-dev/neo-go/pkg/interop/neogointernal"')
    content = fill(
        _ONCHAIN_TMPL,
        "go/onchain",
        package=package_name(ctr.contract_name),
        manifest_name=manifest_name,
        imports="\n".join("\t" + i for i in imports),
        hash_bytes=_go_string_bytes(ScriptHash.from_string_le(ctr.hash).to_bytes_be()),
        methods=methods,
    )
    return [RenderedFile(PurePosixPath(file_name(manifest_name)), content)]


# ---------------------------------------------------------------------------
# off-chain
# ---------------------------------------------------------------------------

_OFFCHAIN_TMPL = """// Code generated by cpm. DO NOT EDIT.

// Package {package} contains RPC wrappers for {manifest_name} contract.
package {package}

import (
{imports}
)

// Hash contains contract hash.
var Hash = util.Uint160{{{hash_bytes}}}

// Invoker is used by ContractReader to call various safe methods.
type Invoker interface {{
	Call(contract util.Uint160, operation string, params ...any) (*result.Invoke, error)
	TerminateSession(sessionID uuid.UUID) error
	TraverseIterator(sessionID uuid.UUID, iterator *result.Iterator, num int) ([]stackitem.Item, error)
}}
{actor}
// ContractReader implements safe contract methods.
type ContractReader struct {{
	invoker Invoker
	hash    util.Uint160
}}
{contract}
// NewReader creates an instance of ContractReader using Hash and the given Invoker.
func NewReader(invoker Invoker) *ContractReader {{
	return &ContractReader{{invoker, Hash}}
}}
{new_contract}{methods}"""

_ACTOR_TMPL = """
// Actor is used by Contract to call state-changing methods.
type Actor interface {{
	Invoker

	MakeCall(contract util.Uint160, method string, params ...any) (*transaction.Transaction, error)
	MakeUnsignedCall(contract util.Uint160, method string, attrs []transaction.Attribute, params ...any) (*transaction.Transaction, error)
	SendCall(contract util.Uint160, method string, params ...any) (util.Uint256, uint32, error)
}}
"""

_CONTRACT_TMPL = """
// Contract implements all contract methods.
type Contract struct {{
	ContractReader
	actor Actor
	hash  util.Uint160
}}
"""

_NEW_CONTRACT_TMPL = """
// New creates an instance of Contract using Hash and the given Actor.
func New(actor Actor) *Contract {{
	return &Contract{{ContractReader{{actor, Hash}}, actor, Hash}}
}}
"""

_READER_METHOD_TMPL = """
// {name} {comment}
func (c *ContractReader) {name}({params}) {ret} {{
	return {unwrap}(c.invoker.Call(c.hash, "{name_abi}"{args}))
}}
"""

_READER_VOID_TMPL = """
// {name} {comment}
func (c *ContractReader) {name}({params}) error {{
	return {unwrap}(c.invoker.Call(c.hash, "{name_abi}"{args}))
}}
"""

_ITERATOR_METHOD_TMPL = """
// {name} {comment}
// The returned iterator is traversed in pages of itemsPerRequest items until
// the node returns an empty page.
func (c *ContractReader) {name}({params}itemsPerRequest int) ([]stackitem.Item, error) {{
	sess, iter, err := unwrap.SessionIterator(c.invoker.Call(c.hash, "{name_abi}"{args}))
	if err != nil {{
		return nil, err
	}}
	defer func() {{ _ = c.invoker.TerminateSession(sess) }}()

	var items []stackitem.Item
	for {{
		page, err := c.invoker.TraverseIterator(sess, &iter, itemsPerRequest)
		if err != nil {{
			return items, err
		}}
		if len(page) == 0 {{
			return items, nil
		}}
		for _, item := range page {{
			if item.Type() == stackitem.InteropT {{
				return items, errors.New("can not have an iterator inside another iterator")
			}}
		}}
		items = append(items, page...)
	}}
}}
"""

_SUBMIT_METHODS_TMPL = """
// {name} creates a transaction invoking `{name_abi}` method of the contract.
// This transaction is signed and immediately sent to the network.
// The values returned are its hash, ValidUntilBlock value and error if any.
func (c *Contract) {name}({params}) (util.Uint256, uint32, error) {{
	return c.actor.SendCall(c.hash, "{name_abi}"{args})
}}

// {name}Transaction creates a transaction invoking `{name_abi}` method of the contract.
// This transaction is signed, but not sent to the network, instead it's
// returned to the caller.
func (c *Contract) {name}Transaction({params}) (*transaction.Transaction, error) {{
	return c.actor.MakeCall(c.hash, "{name_abi}"{args})
}}

// {name}Unsigned creates a transaction invoking `{name_abi}` method of the contract.
// This transaction is not signed, it's simply returned to the caller.
// Any fields of it that do not affect fees can be changed (ValidUntilBlock,
// Nonce), fee values (NetworkFee, SystemFee) can be increased as well.
func (c *Contract) {name}Unsigned({params}) (*transaction.Transaction, error) {{
	return c.actor.MakeUnsignedCall(c.hash, "{name_abi}", nil{args})
}}
"""

# import path -> identifier that marks its use in the rendered body
_OFFCHAIN_IMPORTS = [
    ("errors", "errors."),
    ("math/big", "big."),
    ("", ""),
    ("github.com/google/uuid", "uuid."),
    ("github.com/nspcc-dev/neo-go/pkg/core/transaction", "transaction."),
    ("github.com/nspcc-dev/neo-go/pkg/crypto/keys", "keys."),
    ("github.com/nspcc-dev/neo-go/pkg/neorpc/result", "result."),
    ("github.com/nspcc-dev/neo-go/pkg/rpcclient/unwrap", "unwrap."),
    ("github.com/nspcc-dev/neo-go/pkg/util", "util."),
    ("github.com/nspcc-dev/neo-go/pkg/vm/stackitem", "stackitem."),
]


def _reader_method(m: MethodTemplate, name: str, unwrap: str) -> str:
    values = dict(
        name=name,
        name_abi=m.name_abi,
        comment=m.comment,
        args=_call_args(m),
    )
    if m.is_iterator:
        params = join_args(_args(m), "{name} {type}, ", sep="")
        return fill(_ITERATOR_METHOD_TMPL, "go/offchain/iterator", params=params, **values)
    params = join_args(_args(m), "{name} {type}")
    if m.is_void:
        return fill(_READER_VOID_TMPL, "go/offchain/reader", params=params, unwrap=unwrap, **values)
    ret = f"({m.return_type}, error)"
    return fill(_READER_METHOD_TMPL, "go/offchain/reader", params=params, ret=ret, unwrap=unwrap, **values)


def _offchain_method(m: MethodTemplate, unwrap: str) -> str:
    if m.safe:
        return _reader_method(m, m.name, unwrap)
    submit = fill(
        _SUBMIT_METHODS_TMPL,
        "go/offchain/submit",
        name=m.name,
        name_abi=m.name_abi,
        params=join_args(_args(m), "{name} {type}"),
        args=_call_args(m),
    )
    return submit + _reader_method(m, "Test" + m.name, unwrap)


def _imports(body: str) -> str:
    lines = []
    for path, marker in _OFFCHAIN_IMPORTS:
        if not path:
            if lines and lines[-1]:
                lines.append("")
            continue
        if marker in body:
            lines.append(f'\t"{path}"')
    return "\n".join(lines).strip("\n")


def render_offchain(ctr: ContractTemplate, mapper: TypeMapper, manifest_name: str) -> List[RenderedFile]:
    has_submit = any(not m.safe for m in ctr.methods)
    methods = "".join(_offchain_method(m, mapper.unwrap(m.return_type_abi)) for m in ctr.methods)
    skeleton = dict(
        package=package_name(ctr.contract_name),
        manifest_name=manifest_name,
        hash_bytes=", ".join(f"0x{b:02x}" for b in ScriptHash.from_string_le(ctr.hash).to_bytes_be()),
        actor=fill(_ACTOR_TMPL, "go/offchain/actor") if has_submit else "",
        contract=fill(_CONTRACT_TMPL, "go/offchain/contract") if has_submit else "",
        new_contract=fill(_NEW_CONTRACT_TMPL, "go/offchain/new") if has_submit else "",
        methods=methods,
    )
    # imports depend on which packages the rendered body refers to
    body = fill(_OFFCHAIN_TMPL, "go/offchain", imports="", **skeleton)
    content = fill(_OFFCHAIN_TMPL, "go/offchain", imports=_imports(body), **skeleton)
    return [RenderedFile(PurePosixPath(file_name(manifest_name)), content)]


def package_name(contract_name: str) -> str:
    return re.sub(r"\W", "", contract_name, flags=re.ASCII).lower()


def file_name(manifest_name: str) -> str:
    return manifest_name.lower() + ".go"


__all__ = ["render_onchain", "render_offchain", "package_name", "file_name"]

"""
TypeScript off-chain SDK for neon-dappkit.

Given a contract named ``Sample Contract`` the output is::

    sample-contract/
        api.ts              # ContractInvocation builders, one per method
        SampleContract.ts   # class with invoke/test methods and event hooks
        index.ts

which is used as::

    const sampleContract = new SampleContract({
        scriptHash: SampleContract.SCRIPT_HASH,
        invoker: await NeonInvoker.init({ rpcAddress }),
        eventListener: new NeonEventListener(rpcAddress),
    })
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import List

from ..mappers import TypeMapper
from ..model import ContractTemplate, EventTemplate, MethodTemplate
from ..naming import kebab_folder_name, upper_first
from .common import RenderedFile, fill, join_args

ITEMS_PER_REQUEST = 20

_API_TMPL = """import {{ Neo3Parser, ContractInvocation}} from "@cityofzion/neon-dappkit-types"
{methods}"""

_API_METHOD_TMPL = """
export function {name}API(scriptHash: string{params}): ContractInvocation {{
	return {{
		scriptHash,
		operation: '{name_abi}',
		args: [{args}
		],
	}}
}}
"""

_CLASS_TMPL = """import {{ Neo3EventListener, Neo3EventListenerCallback, Neo3Invoker, Neo3Parser, TypeChecker }} from "@cityofzion/neon-dappkit-types"
import * as Invocation from './api'

export type SmartContractConfig = {{
  scriptHash: string;
  invoker: Neo3Invoker;
  parser?: Neo3Parser;
  eventListener?: Neo3EventListener | null;
}}

export class {contract_name}{{
  static SCRIPT_HASH = '{hash}'

  private config: Required<SmartContractConfig>

	constructor(configOptions: SmartContractConfig) {{
		this.config = {{
			...configOptions,
			parser: configOptions.parser ?? require("@cityofzion/neon-dappkit").NeonParser,
			eventListener: configOptions.eventListener ?? null
		}}
	}}
{events}{methods}}}
"""

_INVOKE_TMPL = """
	async {name}({params}): Promise<string>{{
		return await this.config.invoker.invokeFunction({{
			invocations: [Invocation.{name}API(this.config.scriptHash{call_args})],
			signers: [],
		}})
	}}
"""

_TEST_INVOKE_TMPL = """
	async {test_name}({params}): Promise<{ret}>{{
		const res = await this.config.invoker.testInvoke({{
			invocations: [Invocation.{name}API(this.config.scriptHash{call_args})],
			signers: [],
		}})

		if (res.stack.length === 0) {{
			throw new Error(res.exception ?? 'unrecognized response')
		}}{result}
	}}
"""

_TEST_RESULT_TMPL = """

		return this.config.parser.parseRpcResponse(res.stack[0], {{ type: '{ret_abi}' }})"""

_ITERATOR_TMPL = """
	async* {test_name}({params}itemsPerRequest: number = {items_per_request}): AsyncGenerator<any[], void> {{
		const res = await this.config.invoker.testInvoke({{
			invocations: [Invocation.{name}API(this.config.scriptHash{call_args})],
			signers: [],
		}})

		if (res.stack.length !== 0 && res.session !== undefined && TypeChecker.isStackTypeInteropInterface(res.stack[0])) {{

			let iterator = await this.config.invoker.traverseIterator(res.session, res.stack[0].id, itemsPerRequest)

			while (iterator.length !== 0){{
				if (TypeChecker.isStackTypeInteropInterface(iterator[0])){{
					throw new Error(res.exception ?? 'can not have an iterator inside another iterator')
				}}else{{
					const iteratorValues = iterator.map((item) => {{
						return this.config.parser.parseRpcResponse(item)
					}})

					yield iteratorValues
					iterator = await this.config.invoker.traverseIterator(res.session, res.stack[0].id, itemsPerRequest)
				}}
			}}
		}}
		else {{
			throw new Error(res.exception ?? 'unrecognized response')
		}}
	}}
"""

_EVENT_TMPL = """
	async confirm{event}Event(txId: string): Promise<void>{{
		if (!this.config.eventListener) throw new Error('EventListener not provided')

		const txResult = await this.config.eventListener.waitForApplicationLog(txId)
		this.config.eventListener.confirmTransaction(
			txResult, {{contract: this.config.scriptHash, eventname: '{name}'}}
		)
	}}

	listen{event}Event(callback: Neo3EventListenerCallback): void{{
		if (!this.config.eventListener) throw new Error('EventListener not provided')

		this.config.eventListener.addEventListener(this.config.scriptHash, '{name}', callback)
	}}

	remove{event}EventListener(callback: Neo3EventListenerCallback): void{{
		if (!this.config.eventListener) throw new Error('EventListener not provided')

		this.config.eventListener.removeEventListener(this.config.scriptHash, '{name}', callback)
	}}
"""

_INDEX_TMPL = """export * from './{contract_name}'
export * from './api'"""


def _params_object(m: MethodTemplate) -> str:
    return "params: { " + join_args(m.arguments, "{name}: {type}") + " }"


def _api_method(m: MethodTemplate) -> str:
    params = f", {_params_object(m)}, parser: Neo3Parser " if m.arguments else ""
    args = "".join(
        f"\n\t\t\tparser.formatRpcArgument(params.{a.name}, {{ type: '{a.type_abi}' }}),"
        for a in m.arguments
    )
    return fill(_API_METHOD_TMPL, "ts/api/method", name=m.name, name_abi=m.name_abi, params=params, args=args)


def _test_method(m: MethodTemplate) -> str:
    values = dict(
        name=m.name,
        test_name=m.name if m.safe else "test" + upper_first(m.name),
        call_args=", params, this.config.parser" if m.arguments else "",
    )
    if m.is_iterator:
        params = _params_object(m) + ", " if m.arguments else ""
        return fill(_ITERATOR_TMPL, "ts/iterator", params=params, items_per_request=ITEMS_PER_REQUEST, **values)
    result = "" if m.return_type == "void" else fill(_TEST_RESULT_TMPL, "ts/test/result", ret_abi=m.return_type_abi)
    params = _params_object(m) + " " if m.arguments else ""
    return fill(_TEST_INVOKE_TMPL, "ts/test", params=params, ret=m.return_type, result=result, **values)


def _invoke_method(m: MethodTemplate) -> str:
    params = _params_object(m) + " " if m.arguments else ""
    call_args = ", params, this.config.parser" if m.arguments else ""
    return fill(_INVOKE_TMPL, "ts/invoke", name=m.name, params=params, call_args=call_args)


def _event(e: EventTemplate) -> str:
    return fill(_EVENT_TMPL, "ts/event", event=upper_first(e.name), name=e.name)


def render_offchain(ctr: ContractTemplate, mapper: TypeMapper, manifest_name: str) -> List[RenderedFile]:
    folder = PurePosixPath(kebab_folder_name(manifest_name))

    api = fill(_API_TMPL, "ts/api", methods="".join(_api_method(m) for m in ctr.methods))

    methods = []
    for m in ctr.methods:
        if not m.safe:
            methods.append(_invoke_method(m))
        methods.append(_test_method(m))
    cls = fill(
        _CLASS_TMPL,
        "ts/class",
        contract_name=ctr.contract_name,
        hash=ctr.hash,
        events="".join(_event(e) for e in ctr.events),
        methods="".join(methods),
    )

    index = fill(_INDEX_TMPL, "ts/index", contract_name=ctr.contract_name)
    return [
        RenderedFile(folder / "api.ts", api),
        RenderedFile(folder / f"{ctr.contract_name}.ts", cls),
        RenderedFile(folder / "index.ts", index),
    ]


__all__ = ["render_offchain", "ITEMS_PER_REQUEST"]

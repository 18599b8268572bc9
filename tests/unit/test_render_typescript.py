from __future__ import annotations

import re
from pathlib import PurePosixPath

import pytest

from cpm.codegen import GenerateConfig, render_sdk
from cpm.errors import UnsupportedTargetError

from . import by_name

_PARAMS = "params: { from: string, to: string, amount: number, data: any }"


def test_folder_layout(render):
    files = render("ts", "offchain")
    assert [f.path for f in files] == [
        PurePosixPath("sample-contract/api.ts"),
        PurePosixPath("sample-contract/SampleContract.ts"),
        PurePosixPath("sample-contract/index.ts"),
    ]
    assert by_name(files, "index.ts").content == "export * from './SampleContract'\nexport * from './api'"


def test_api_builders(render):
    api = by_name(render("ts", "offchain"), "api.ts").content
    assert f"export function transferAPI(scriptHash: string, {_PARAMS}, parser: Neo3Parser ): ContractInvocation {{" in api
    assert "parser.formatRpcArgument(params.from, { type: 'Hash160' })," in api
    assert "export function symbolAPI(scriptHash: string): ContractInvocation {" in api
    assert "operation: 'balanceOf'," in api


def test_class_methods(render):
    cls = by_name(render("ts", "offchain"), "SampleContract.ts").content
    assert "static SCRIPT_HASH = '0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5'" in cls
    assert f"\tasync transfer({_PARAMS} ): Promise<string>{{" in cls
    assert f"\tasync testTransfer({_PARAMS} ): Promise<boolean>{{" in cls
    assert "invocations: [Invocation.transferAPI(this.config.scriptHash, params, this.config.parser)]," in cls
    assert "\tasync symbol(): Promise<string>{" in cls
    assert "async testSymbol" not in cls
    assert "return this.config.parser.parseRpcResponse(res.stack[0], { type: 'String' })" in cls


def test_void_preview_returns_nothing(render):
    cls = by_name(render("ts", "offchain"), "SampleContract.ts").content
    start = cls.index("\tasync testUpdate(params: { nefFile: string, manifest: string } ): Promise<void>{")
    end = cls.index("\n\t}\n", start)
    assert "parseRpcResponse" not in cls[start:end]


def test_iterator_generator(render):
    cls = by_name(render("ts", "offchain"), "SampleContract.ts").content
    assert "\tasync* tokens(itemsPerRequest: number = 20): AsyncGenerator<any[], void> {" in cls
    assert "this.config.invoker.traverseIterator(res.session, res.stack[0].id, itemsPerRequest)" in cls
    assert "'can not have an iterator inside another iterator'" in cls


def test_event_hooks(render):
    cls = by_name(render("ts", "offchain"), "SampleContract.ts").content
    for hook in (
        "async confirmTransferEvent(txId: string): Promise<void>{",
        "listenTransferEvent(callback: Neo3EventListenerCallback): void{",
        "removeTransferEventListener(callback: Neo3EventListenerCallback): void{",
        "listenPingEvent(callback: Neo3EventListenerCallback): void{",
    ):
        assert hook in cls
    assert cls.count("throw new Error('EventListener not provided')") == 6
    assert "eventname: 'Transfer'" in cls


def test_onchain_is_not_supported(sample_manifest, script_hash):
    cfg = GenerateConfig(manifest=sample_manifest, contract_hash=script_hash, destination="out/", mode="onchain")
    with pytest.raises(UnsupportedTargetError):
        render_sdk(cfg, "ts")


def test_overloads_have_unique_full_signatures(render):
    files = render("ts", "offchain")
    api = by_name(files, "api.ts").content
    cls = by_name(files, "SampleContract.ts").content
    assert (
        "export function add3API(scriptHash: string, params: { a: number, b: number, c: number }, parser: Neo3Parser ): ContractInvocation {"
        in api
    )
    assert "export function add2_2API(scriptHash: string, params: { x: number, y: number }, parser: Neo3Parser ): ContractInvocation {" in api
    assert api.count("operation: 'add',") == 4
    assert "\tasync add2_2(params: { x: number, y: number } ): Promise<number>{" in cls
    assert "invocations: [Invocation.add2_2API(this.config.scriptHash, params, this.config.parser)]," in cls
    builders = re.findall(r"export function (\w+)API\(", api)
    assert len(builders) == len(set(builders))
    members = re.findall(r"^\tasync\*? (\w+)\(", cls, re.M)
    assert len(members) == len(set(members))

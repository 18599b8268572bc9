from __future__ import annotations

import pytest

from cpm import rpc, workflow
from cpm.config import load_config
from cpm.errors import DownloadError, GenerationError, RpcError


class FakeDownloader:
    def __init__(self, fail_hosts=()):
        self.fail_hosts = set(fail_hosts)
        self.calls = []

    def download_contract(self, script_hash, host):
        self.calls.append(host)
        if host in self.fail_hosts:
            raise DownloadError("neoxp exited with status 1", host=host, output="[NEOXP]boom")
        return f"[NEOXP]downloaded 0x{script_hash.string_le()}"


class FakeFetcher:
    def __init__(self, manifest, fail_hosts=()):
        self.manifest = manifest
        self.fail_hosts = set(fail_hosts)
        self.calls = []

    def __call__(self, script_hash, host):
        self.calls.append(host)
        if host in self.fail_hosts:
            raise RpcError(code=-100, message="Unknown contract", method="getcontractstate", host=host)
        return self.manifest


HOSTS = ["https://testnet1.example:443", "https://testnet2.example:443"]


def test_download_falls_back_to_next_host(script_hash):
    d = FakeDownloader(fail_hosts=[HOSTS[0]])
    message, host = workflow.download_contract(HOSTS, script_hash, d)
    assert host == HOSTS[1]
    assert message.startswith("[NEOXP]")
    assert d.calls == HOSTS


def test_download_fails_when_every_host_fails(script_hash):
    with pytest.raises(DownloadError) as ei:
        workflow.download_contract(HOSTS, script_hash, FakeDownloader(fail_hosts=HOSTS))
    assert "0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5" in str(ei.value)
    assert "--log-level DEBUG" in str(ei.value)


def test_fetch_manifest_falls_back(sample_manifest, script_hash):
    fetcher = FakeFetcher(sample_manifest, fail_hosts=[HOSTS[0]])
    manifest, host = workflow.fetch_manifest(HOSTS, script_hash, fetcher)
    assert manifest is sample_manifest
    assert host == HOSTS[1]


def test_fetch_manifest_no_hosts(sample_manifest, script_hash):
    with pytest.raises(DownloadError):
        workflow.fetch_manifest([], script_hash, FakeFetcher(sample_manifest))


def test_generate_all_keeps_going_after_a_failure(sample_manifest, script_hash, memory_sink):
    targets = [("ts", "onchain"), ("python", "offchain"), ("go", "onchain")]
    report = workflow.generate_all(
        sample_manifest,
        script_hash,
        targets,
        lambda lang, mode: f"out/{mode.value}/{lang.value}/",
        memory_sink,
    )
    assert not report.ok
    assert [t for t, _ in report.failed] == [("ts", "onchain")]
    written = {str(p) for p in report.written}
    assert any(p.startswith("out/offchain/python/") for p in written)
    assert any(p.startswith("out/onchain/go/") for p in written)
    assert not any("/ts/" in p for p in memory_sink.files)


def test_contract_targets_use_defaults(project_dir):
    cfg = load_config()
    assert workflow.contract_targets(cfg, cfg.contracts[0]) == [
        ("go", "onchain"),
        ("python", "offchain"),
        ("ts", "offchain"),
    ]


def test_run_downloads_then_generates_from_serving_host(project_dir, sample_manifest, memory_sink):
    cfg = load_config()
    d = FakeDownloader(fail_hosts=[HOSTS[0]])
    fetcher = FakeFetcher(sample_manifest)
    reports = workflow.run(cfg, downloader=d, fetcher=fetcher, sink=memory_sink)
    assert len(reports) == 1 and reports[0].ok
    assert fetcher.calls == [HOSTS[1]]
    files = set(memory_sink.files)
    assert any(p.startswith("cpm_out/onchain/go/") for p in files)
    assert any(p.startswith("cpm_out/offchain/python/") for p in files)
    assert any(p.startswith("cpm_out/offchain/ts/") for p in files)


def test_run_sdk_only_skips_download(project_dir, sample_manifest, memory_sink):
    cfg = load_config()
    fetcher = FakeFetcher(sample_manifest)
    reports = workflow.run(cfg, download=False, fetcher=fetcher, sink=memory_sink)
    assert reports[0].ok
    assert fetcher.calls == [HOSTS[0]]


def test_run_download_only_skips_generation(project_dir, sample_manifest, memory_sink):
    cfg = load_config()
    d = FakeDownloader()
    fetcher = FakeFetcher(sample_manifest)
    assert workflow.run(cfg, generate=False, downloader=d, fetcher=fetcher, sink=memory_sink) == []
    assert d.calls == [HOSTS[0]]
    assert fetcher.calls == []
    assert memory_sink.files == {}


def test_run_respects_contract_generate_sdk(project_dir, sample_manifest, memory_sink):
    cfg = load_config()
    cfg.contracts[0].generate_sdk = False
    fetcher = FakeFetcher(sample_manifest)
    assert workflow.run(cfg, downloader=FakeDownloader(), fetcher=fetcher, sink=memory_sink) == []
    assert fetcher.calls == []


def test_run_raises_after_failed_target(project_dir, sample_manifest, memory_sink):
    cfg = load_config()
    cfg.contracts[0].on_chain_languages = ["ts"]
    with pytest.raises(GenerationError) as ei:
        workflow.run(cfg, download=False, fetcher=FakeFetcher(sample_manifest), sink=memory_sink)
    assert "ts/onchain" in str(ei.value)
    # the off-chain targets were still written
    assert any(p.startswith("cpm_out/offchain/python/") for p in memory_sink.files)


def test_run_requires_downloader(project_dir):
    with pytest.raises(ValueError):
        workflow.run(load_config())


def test_fetch_manifest_skips_host_without_scheme(sample_manifest, script_hash):
    def fetcher(h, host):
        if host.startswith("https://"):
            return sample_manifest
        return rpc.fetch_manifest(h, host, timeout=1.0)

    manifest, host = workflow.fetch_manifest(["localhost:50012", HOSTS[0]], script_hash, fetcher)
    assert manifest is sample_manifest
    assert host == HOSTS[0]
    with pytest.raises(DownloadError):
        workflow.fetch_manifest(["localhost:50012"], script_hash, fetcher)

"""
High-level flows behind ``cpm run`` and ``cpm download``.

Each network label maps to several hosts; every flow tries them in order
and stops at the first success. Individual host failures are only logged at
DEBUG, so ``--log-level DEBUG`` shows why a contract could not be fetched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from . import log as clog
from .codegen import GenerateConfig, Language, SdkMode, generate_sdk
from .codegen.sink import OutputSink
from .codegen.targets import parse_target
from .config import ContractConfig, CpmConfig
from .downloader import Downloader
from .errors import CpmError, DownloadError, GenerationError
from .hashes import ScriptHash
from .manifest import Manifest

log = logging.getLogger(__name__)

ManifestFetcher = Callable[[ScriptHash, str], Manifest]
DestinationFor = Callable[[Language, SdkMode], str]

_DEBUG_HINT = "Use '--log-level DEBUG' for more information"


@dataclass
class GenerationReport:
    written: List[PurePosixPath] = field(default_factory=list)
    failed: List[Tuple[Tuple[str, str], CpmError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def download_contract(hosts: Sequence[str], script_hash: ScriptHash, downloader: Downloader) -> Tuple[str, str]:
    """Download from the first host that works; returns the downloader output and that host."""
    for host in hosts:
        with clog.scope(host=host):
            log.debug("attempting to download contract 0x%s from %s", script_hash.string_le(), host)
            try:
                return downloader.download_contract(script_hash, host), host
            except DownloadError as e:
                log.debug("%s %s", e, e.output)
    raise DownloadError(f"failed to download contract 0x{script_hash.string_le()}. {_DEBUG_HINT}")


def fetch_manifest(hosts: Sequence[str], script_hash: ScriptHash, fetcher: ManifestFetcher) -> Tuple[Manifest, str]:
    """Fetch the manifest from the first host that answers; returns it with that host."""
    for host in hosts:
        with clog.scope(host=host):
            try:
                return fetcher(script_hash, host), host
            except CpmError as e:
                log.debug("fetching manifest failed: %s", e)
    raise DownloadError(f"failed to fetch manifest for 0x{script_hash.string_le()}. {_DEBUG_HINT}")


def generate_all(
    manifest: Manifest,
    script_hash: ScriptHash,
    targets: Iterable[Tuple[str, str]],
    destination_for: DestinationFor,
    sink: Optional[OutputSink] = None,
) -> GenerationReport:
    """Generate every (language, mode) target; one failing target does not stop the rest."""
    report = GenerationReport()
    for language, mode in targets:
        with clog.scope(contract=manifest.name, language=str(language), mode=str(mode)):
            try:
                lang, md = parse_target(language, mode)
                cfg = GenerateConfig(
                    manifest=manifest,
                    contract_hash=script_hash,
                    destination=destination_for(lang, md),
                    mode=md,
                )
                report.written.extend(generate_sdk(cfg, lang, sink))
            except CpmError as e:
                log.error("SDK generation failed: %s", e)
                report.failed.append(((str(language), str(mode)), e))
    return report


def contract_targets(config: CpmConfig, contract: ContractConfig) -> List[Tuple[str, str]]:
    targets = [(lang, SdkMode.ONCHAIN.value) for lang in config.languages_for(contract, "onchain")]
    targets += [(lang, SdkMode.OFFCHAIN.value) for lang in config.languages_for(contract, "offchain")]
    return targets


def _generate_for(
    config: CpmConfig,
    contract: ContractConfig,
    manifest: Manifest,
    sink: Optional[OutputSink],
) -> GenerationReport:
    return generate_all(
        manifest,
        contract.script_hash,
        contract_targets(config, contract),
        lambda lang, mode: config.sdk_destination(lang.value, mode.value),
        sink,
    )


def run(
    config: CpmConfig,
    *,
    download: bool = True,
    generate: bool = True,
    downloader: Optional[Downloader] = None,
    fetcher: Optional[ManifestFetcher] = None,
    sink: Optional[OutputSink] = None,
) -> List[GenerationReport]:
    """
    Process every contract in ``config``.

    With ``download`` the contract is first copied into the local chain and
    the SDKs are generated from the manifest of the host that served it.
    Without it the manifest is fetched directly. Contracts whose
    ``contract-generate-sdk`` is off are only downloaded.

    Raises:
        DownloadError: a contract could not be downloaded from any host.
        GenerationError: at least one SDK of a contract failed to generate.
    """
    if download and downloader is None:
        raise ValueError("a downloader is required when downloading contracts")
    if fetcher is None:
        from .rpc import fetch_manifest as fetcher

    reports: List[GenerationReport] = []
    for contract in config.contracts:
        label = contract.label
        log.info("Processing contract '%s' (%s)", label, contract.script_hash.string_le())
        hosts = config.hosts_for(contract.source_network or config.defaults.contract_source_network)
        wants_sdk = generate and bool(contract.generate_sdk)

        with clog.scope(contract=label):
            sdk_hosts = hosts
            if download:
                message, host = download_contract(hosts, contract.script_hash, downloader)
                log.info(message)
                # generate from the node the contract was downloaded from
                sdk_hosts = [host]
            if not wants_sdk:
                continue
            manifest, _ = fetch_manifest(sdk_hosts, contract.script_hash, fetcher)
            report = _generate_for(config, contract, manifest, sink)
            reports.append(report)
            if not report.ok:
                failed = ", ".join(f"{lang}/{mode}" for (lang, mode), _ in report.failed)
                raise GenerationError(
                    f"failed to generate SDK for contract '{label}' ({failed}). {_DEBUG_HINT}"
                )
    return reports


__all__ = [
    "GenerationReport",
    "download_contract",
    "fetch_manifest",
    "generate_all",
    "contract_targets",
    "run",
]

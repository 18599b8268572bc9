"""
cpm.cli.main
============

`cpm`: download Neo contracts into a local chain and generate SDKs for them.

Examples
--------
    $ cpm init
    $ cpm run --sdk-only
    $ cpm download contract -c 0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5 -n testnet
    $ cpm download manifest -c 0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5 -N https://testnet1.neo.coz.io:443
    $ cpm generate python -m contract.manifest.json -t offchain -o sdk/

Configuration
-------------
- Config file : ``cpm.yaml`` in the working directory, or env `CPM_CONFIG`
- Log format  : env `CPM_LOG_FORMAT` (text|json)
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, List, Optional

import typer

from .. import log as clog
from .. import workflow
from ..codegen import GenerateConfig, Language, SdkMode, generate_sdk
from ..config import CpmConfig, create_default_config, ensure_suffix, load_config
from ..downloader import NeoExpressDownloader
from ..errors import CpmError, GenerationError
from ..hashes import ScriptHash
from ..manifest import load_manifest
from ..rpc import fetch_manifest as rpc_fetch_manifest
from ..version import __version__

log = logging.getLogger(__name__)

MANIFEST_FILE = "contract.manifest.json"

app = typer.Typer(
    name="cpm",
    help="Contract Package Manager: download contracts and generate SDKs.",
    no_args_is_help=True,
    add_completion=False,
)
download_app = typer.Typer(help="Download contracts or manifests", no_args_is_help=True)
generate_app = typer.Typer(help="Generate SDK from a contract manifest", no_args_is_help=True)
app.add_typer(download_app, name="download")
app.add_typer(generate_app, name="generate")

__all__ = ["app", "main", "run"]


class LogLevel(str, Enum):
    INFO = "INFO"
    DEBUG = "DEBUG"


@contextmanager
def _fatal_on_error() -> Iterator[None]:
    """Print cpm errors on stderr and exit with status 1."""
    try:
        yield
    except CpmError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1) from e


def _parse_hash(text: str) -> ScriptHash:
    try:
        return ScriptHash.from_string_le(text)
    except ValueError as e:
        raise typer.BadParameter(f"failed to convert script hash: {e}") from e


def _resolve_hosts(network_label: Optional[str], network_host: Optional[str], cfg: Optional[CpmConfig]) -> List[str]:
    if network_label and network_host:
        raise typer.BadParameter("-n and -N flags are mutually exclusive")
    if network_label:
        return (cfg or load_config()).hosts_for(network_label)
    if network_host:
        return [network_host]
    raise typer.BadParameter("Must specify either -n or -N flag")


@app.callback()
def _root(
    log_level: LogLevel = typer.Option(
        LogLevel.INFO,
        "--log-level",
        help="Log level (INFO or DEBUG).",
        case_sensitive=False,
    ),
) -> None:
    clog.configure(level=log_level.value)


@app.command("version")
def version() -> None:
    """Print the cpm version."""
    typer.echo(f"cpm {__version__}")


@app.command("init")
def init() -> None:
    """Create a new cpm.yaml config file."""
    with _fatal_on_error():
        path = create_default_config()
    typer.echo(f"Written {path}")


@app.command("run")
def run_cmd(
    download_only: bool = typer.Option(
        False, "--download-only", help="Override config settings to only download contracts and storage."
    ),
    sdk_only: bool = typer.Option(False, "--sdk-only", help="Override config settings to only generate SDKs."),
) -> None:
    """Download all contracts from cpm.yaml and generate their SDKs."""
    if download_only and sdk_only:
        raise typer.BadParameter("sdk-only and download-only flags are mutually exclusive.")
    with _fatal_on_error():
        cfg = load_config()
        downloader = None
        if not sdk_only:
            # only neo-express is supported for now
            downloader = NeoExpressDownloader(cfg.tools.config_path, cfg.tools.executable_path)
        workflow.run(
            cfg,
            download=not sdk_only,
            generate=not download_only,
            downloader=downloader,
            fetcher=rpc_fetch_manifest,
        )


@download_app.command("contract")
def download_contract(
    contract: str = typer.Option(..., "-c", help="Contract script hash."),
    network_label: Optional[str] = typer.Option(
        None, "-n", help="Source network label. Searches cpm.yaml for the network by label to find the host."
    ),
    network_host: Optional[str] = typer.Option(None, "-N", help="Source network host."),
    express_config: Optional[str] = typer.Option(
        None, "-i", help="neo express config file (default: from cpm.yaml)."
    ),
    save: bool = typer.Option(True, "--save/--no-save", help="Save contract to the 'contracts' section of cpm.yaml."),
) -> None:
    """Download a single contract into the local chain."""
    script_hash = _parse_hash(contract)
    with _fatal_on_error():
        cfg = load_config()
        hosts = _resolve_hosts(network_label, network_host, cfg)
        downloader = NeoExpressDownloader(express_config or cfg.tools.config_path, cfg.tools.executable_path)
        message, _ = workflow.download_contract(hosts, script_hash, downloader)
        log.info(message)
        if save and cfg.add_contract("unknown", script_hash):
            cfg.save()


@download_app.command("manifest")
def download_manifest(
    contract: str = typer.Option(..., "-c", help="Contract script hash."),
    network_label: Optional[str] = typer.Option(
        None, "-n", help="Source network label. Searches cpm.yaml for the network by label to find the host."
    ),
    network_host: Optional[str] = typer.Option(None, "-N", help="Source network host."),
    save: bool = typer.Option(True, "--save/--no-save", help="Save contract to the 'contracts' section of cpm.yaml."),
) -> None:
    """Download a contract manifest into contract.manifest.json."""
    script_hash = _parse_hash(contract)
    with _fatal_on_error():
        hosts = _resolve_hosts(network_label, network_host, None)
        manifest, _ = workflow.fetch_manifest(hosts, script_hash, rpc_fetch_manifest)
        try:
            with open(MANIFEST_FILE, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(manifest.to_dict(), indent=3))
        except OSError as e:
            raise GenerationError(f"can't write manifest: {e.strerror or e}", path=MANIFEST_FILE) from e
        log.info("Written manifest to %s", MANIFEST_FILE)
        if save:
            cfg = load_config()
            if cfg.add_contract(manifest.name, script_hash):
                cfg.save()


def _generate(language: Language, manifest_path: str, contract: Optional[str], output: Optional[str], sdk_type: SdkMode) -> None:
    script_hash = _parse_hash(contract) if contract else ScriptHash.zero()
    with _fatal_on_error():
        manifest = load_manifest(manifest_path)
        if output:
            dest = ensure_suffix(output)
        else:
            dest = load_config().sdk_destination(language.value, sdk_type.value)
        cfg = GenerateConfig(manifest=manifest, contract_hash=script_hash, destination=dest, mode=sdk_type)
        generate_sdk(cfg, language)


def _register_generate(language: Language, default_mode: SdkMode, help_text: str) -> None:
    def command(
        manifest: str = typer.Option(..., "-m", help="Path to contract manifest.json."),
        contract: Optional[str] = typer.Option(None, "-c", help="Contract script hash if known."),
        output: Optional[str] = typer.Option(None, "-o", help="Output folder."),
        sdk_type: SdkMode = typer.Option(default_mode, "-t", help="SDK type (onchain or offchain)."),
    ) -> None:
        _generate(language, manifest, contract, output, sdk_type)

    command.__doc__ = help_text
    generate_app.command(language.value)(command)


_register_generate(Language.GO, SdkMode.ONCHAIN, "Generate an SDK for use with Go.")
_register_generate(Language.PYTHON, SdkMode.ONCHAIN, "Generate an SDK for use with Python.")
_register_generate(Language.JAVA, SdkMode.ONCHAIN, "Generate an SDK for use with Java.")
_register_generate(Language.CSHARP, SdkMode.ONCHAIN, "Generate an SDK for use with C#.")
_register_generate(Language.TYPESCRIPT, SdkMode.OFFCHAIN, "Generate an SDK for use with TypeScript (off-chain only).")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI. Returns an integer exit code."""
    try:
        app(prog_name="cpm", args=argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else (0 if e.code is None else 1)
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run()

from __future__ import annotations
"""
cpm.config: the ``cpm.yaml`` project file

Lists the contracts a project depends on, where to download them from and
which SDKs to generate for them:

    defaults:
      contract-source-network: testnet
      contract-destination: NeoExpress
      contract-generate-sdk: true
      on-chain:
        languages: [python]
      off-chain:
        languages: [ts]
      sdk-destinations:
        on-chain:
          python: contracts/sdk/
    contracts:
      - label: NEO
        script-hash: "0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5"
        off-chain:
          languages: [python, ts]
    tools:
      neo-express:
        executable-path: null
        config-path: default.neo-express
    networks:
      - label: testnet
        hosts: ["https://testnet1.neo.coz.io:443"]

The file is looked up from the explicit path, then ``CPM_CONFIG``, then
``./cpm.yaml``. JSON is valid YAML, so ``cpm.json``-style files load too.
Contracts without ``source-network`` / ``contract-generate-sdk`` inherit
them from ``defaults``.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import ConfigError
from .hashes import ScriptHash

log = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "cpm.yaml"
OUTPUT_ROOT = "cpm_out/"

_MODES = ("onchain", "offchain")
_LANGUAGES = ("go", "python", "java", "csharp", "ts")
# yaml section names for each mode
_MODE_KEYS = {"onchain": "on-chain", "offchain": "off-chain"}


def ensure_suffix(path: str) -> str:
    return path if path.endswith("/") else path + "/"


# -------------------------- Data classes --------------------------


@dataclass
class Defaults:
    contract_source_network: str = "priv"
    contract_destination: str = "NeoExpress"
    contract_generate_sdk: bool = False
    on_chain_languages: List[str] = field(default_factory=list)
    off_chain_languages: List[str] = field(default_factory=list)
    # mode -> language -> destination directory
    sdk_destinations: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def validate(self) -> None:
        _check_languages(self.on_chain_languages, "defaults.on-chain.languages")
        _check_languages(self.off_chain_languages, "defaults.off-chain.languages")
        for mode, dests in self.sdk_destinations.items():
            if mode not in _MODES:
                raise ConfigError(f"unknown SDK mode {mode!r}", path="defaults.sdk-destinations")
            _check_languages(list(dests), f"defaults.sdk-destinations.{_MODE_KEYS[mode]}")


@dataclass
class ContractConfig:
    label: str
    script_hash: ScriptHash
    source_network: Optional[str] = None
    generate_sdk: Optional[bool] = None
    # None means "use the defaults"
    on_chain_languages: Optional[List[str]] = None
    off_chain_languages: Optional[List[str]] = None


@dataclass
class NeoExpressTool:
    executable_path: Optional[str] = None
    config_path: str = "default.neo-express"


@dataclass
class Network:
    label: str
    hosts: List[str] = field(default_factory=list)


@dataclass
class CpmConfig:
    """Top-level configuration container."""

    defaults: Defaults = field(default_factory=Defaults)
    contracts: List[ContractConfig] = field(default_factory=list)
    tools: NeoExpressTool = field(default_factory=NeoExpressTool)
    networks: List[Network] = field(default_factory=list)
    path: Optional[Path] = field(default=None, compare=False)

    def validate(self) -> None:
        self.defaults.validate()
        for i, c in enumerate(self.contracts):
            if c.on_chain_languages is not None:
                _check_languages(c.on_chain_languages, f"contracts[{i}].on-chain.languages")
            if c.off_chain_languages is not None:
                _check_languages(c.off_chain_languages, f"contracts[{i}].off-chain.languages")

    def hosts_for(self, label: str) -> List[str]:
        for n in self.networks:
            if n.label == label:
                return list(n.hosts)
        raise ConfigError(f"could not find hosts for network label: {label}", path=_str_path(self.path))

    def sdk_destination(self, language: str, mode: str = "onchain") -> str:
        configured = self.defaults.sdk_destinations.get(str(mode), {}).get(str(language))
        if configured:
            return ensure_suffix(configured)
        return f"{OUTPUT_ROOT}{mode}/{language}/"

    def languages_for(self, contract: ContractConfig, mode: str) -> List[str]:
        if mode == "onchain":
            own, default = contract.on_chain_languages, self.defaults.on_chain_languages
        else:
            own, default = contract.off_chain_languages, self.defaults.off_chain_languages
        return list(own if own is not None else default)

    def add_contract(self, label: str, script_hash: ScriptHash) -> bool:
        """Append a contract entry; returns False if the hash is already listed."""
        if any(c.script_hash == script_hash for c in self.contracts):
            return False
        self.contracts.append(
            ContractConfig(
                label=label,
                script_hash=script_hash,
                source_network=self.defaults.contract_source_network,
                generate_sdk=self.defaults.contract_generate_sdk,
            )
        )
        return True

    def to_dict(self) -> Dict[str, Any]:
        d = self.defaults
        defaults: Dict[str, Any] = {
            "contract-source-network": d.contract_source_network,
            "contract-destination": d.contract_destination,
            "contract-generate-sdk": d.contract_generate_sdk,
            "on-chain": {"languages": list(d.on_chain_languages)},
            "off-chain": {"languages": list(d.off_chain_languages)},
        }
        if d.sdk_destinations:
            defaults["sdk-destinations"] = {_MODE_KEYS[m]: dict(v) for m, v in d.sdk_destinations.items()}
        contracts = []
        for c in self.contracts:
            item: Dict[str, Any] = {"label": c.label, "script-hash": str(c.script_hash)}
            if c.source_network is not None:
                item["source-network"] = c.source_network
            if c.generate_sdk is not None:
                item["contract-generate-sdk"] = c.generate_sdk
            if c.on_chain_languages is not None:
                item["on-chain"] = {"languages": list(c.on_chain_languages)}
            if c.off_chain_languages is not None:
                item["off-chain"] = {"languages": list(c.off_chain_languages)}
            contracts.append(item)
        return {
            "defaults": defaults,
            "contracts": contracts,
            "tools": {
                "neo-express": {
                    "executable-path": self.tools.executable_path,
                    "config-path": self.tools.config_path,
                }
            },
            "networks": [{"label": n.label, "hosts": list(n.hosts)} for n in self.networks],
        }

    def save(self, path: Union[str, Path, None] = None) -> Path:
        target = Path(path) if path is not None else (self.path or Path(DEFAULT_CONFIG_FILE))
        try:
            with open(target, "w", encoding="utf-8") as fh:
                yaml.safe_dump(self.to_dict(), fh, sort_keys=False)
        except OSError as e:
            raise ConfigError(f"can't write config file: {e.strerror or e}", path=str(target)) from e
        log.debug("wrote config %s", target)
        return target


# -------------------------- Loaders --------------------------


def _str_path(p: Optional[Path]) -> Optional[str]:
    return str(p) if p is not None else None


def _check_languages(langs: List[str], where: str) -> None:
    for lang in langs:
        if lang not in _LANGUAGES:
            raise ConfigError(f"unsupported language {lang!r} (allowed: {', '.join(_LANGUAGES)})", path=where)


def _section(raw: Dict[str, Any], key: str, where: str) -> Dict[str, Any]:
    val = raw.get(key)
    if val is None:
        return {}
    if not isinstance(val, dict):
        raise ConfigError(f"{where}.{key} must be a mapping")
    return val


def _languages(raw: Dict[str, Any], key: str, where: str) -> Optional[List[str]]:
    sec = raw.get(key)
    if sec is None:
        return None
    if not isinstance(sec, dict) or not isinstance(sec.get("languages") or [], list):
        raise ConfigError(f"{where}.{key} must be a mapping with a 'languages' list")
    return [str(x) for x in (sec.get("languages") or [])]


def _parse_defaults(raw: Dict[str, Any]) -> Defaults:
    dests: Dict[str, Dict[str, str]] = {}
    for mode, key in _MODE_KEYS.items():
        sec = _section(_section(raw, "sdk-destinations", "defaults"), key, "defaults.sdk-destinations")
        if sec:
            dests[mode] = {str(k): str(v) for k, v in sec.items() if v}
    return Defaults(
        contract_source_network=str(raw.get("contract-source-network", "priv")),
        contract_destination=str(raw.get("contract-destination", "NeoExpress")),
        contract_generate_sdk=bool(raw.get("contract-generate-sdk", False)),
        on_chain_languages=_languages(raw, "on-chain", "defaults") or [],
        off_chain_languages=_languages(raw, "off-chain", "defaults") or [],
        sdk_destinations=dests,
    )


def _parse_contract(raw: Any, i: int, defaults: Defaults) -> ContractConfig:
    where = f"contracts[{i}]"
    if not isinstance(raw, dict):
        raise ConfigError(f"{where} must be a mapping")
    try:
        script_hash = ScriptHash.from_string_le(str(raw["script-hash"]))
    except KeyError:
        raise ConfigError("missing 'script-hash'", path=where) from None
    except ValueError as e:
        raise ConfigError(str(e), path=f"{where}.script-hash") from e
    source = raw.get("source-network")
    gen = raw.get("contract-generate-sdk")
    return ContractConfig(
        label=str(raw.get("label", "unknown")),
        script_hash=script_hash,
        source_network=str(source) if source is not None else defaults.contract_source_network,
        generate_sdk=bool(gen) if gen is not None else defaults.contract_generate_sdk,
        on_chain_languages=_languages(raw, "on-chain", where),
        off_chain_languages=_languages(raw, "off-chain", where),
    )


def parse_config(raw: Any, path: Optional[Path] = None) -> CpmConfig:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("config top-level must be a mapping", path=_str_path(path))

    defaults = _parse_defaults(_section(raw, "defaults", "config"))
    contracts = [_parse_contract(c, i, defaults) for i, c in enumerate(raw.get("contracts") or [])]
    nxp = _section(_section(raw, "tools", "config"), "neo-express", "tools")
    tools = NeoExpressTool(
        executable_path=nxp.get("executable-path") or None,
        config_path=str(nxp.get("config-path") or "default.neo-express"),
    )
    networks = [
        Network(label=str(n.get("label", "")), hosts=[str(h) for h in (n.get("hosts") or [])])
        for n in (raw.get("networks") or [])
        if isinstance(n, dict)
    ]
    cfg = CpmConfig(defaults=defaults, contracts=contracts, tools=tools, networks=networks, path=path)
    cfg.validate()
    return cfg


def resolve_config_path(path: Union[str, Path, None] = None) -> Path:
    if path is not None:
        return Path(path)
    env = os.getenv("CPM_CONFIG")
    if env:
        return Path(env)
    return Path(DEFAULT_CONFIG_FILE)


def load_config(path: Union[str, Path, None] = None) -> CpmConfig:
    p = resolve_config_path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"config file {p} not found. Run `cpm init` to create a default config", path=str(p)) from None
    except OSError as e:
        raise ConfigError(f"can't read config file: {e.strerror or e}", path=str(p)) from e
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"failed to parse config file: {e}", path=str(p)) from e
    return parse_config(raw, path=p)


SAMPLE_CONFIG = """\
defaults:
  contract-source-network: priv
  contract-destination: NeoExpress
  contract-generate-sdk: false
  on-chain:
    languages: []
  off-chain:
    languages: []
contracts:
  - label: Example contract
    script-hash: "0x0000000000000000000000000000000000000000"
tools:
  neo-express:
    executable-path: null
    config-path: default.neo-express
networks:
  - label: mainnet
    hosts:
      - "https://mainnet1.neo.coz.io:443"
      - "http://seed1.neo.org:10332"
  - label: testnet
    hosts:
      - "https://testnet1.neo.coz.io:443"
      - "http://seed1t5.neo.org:20332"
  - label: priv
    hosts:
      - "http://127.0.0.1:50012"
"""


def create_default_config(path: Union[str, Path, None] = None) -> Path:
    """Write the sample config; an existing file is never overwritten."""
    p = Path(path) if path is not None else Path(DEFAULT_CONFIG_FILE)
    if p.exists():
        raise ConfigError(f"{p} already exists", path=str(p))
    try:
        p.write_text(SAMPLE_CONFIG, encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"can't write config file: {e.strerror or e}", path=str(p)) from e
    log.info("Written %s", p)
    return p


__all__ = [
    "DEFAULT_CONFIG_FILE",
    "OUTPUT_ROOT",
    "Defaults",
    "ContractConfig",
    "NeoExpressTool",
    "Network",
    "CpmConfig",
    "ensure_suffix",
    "parse_config",
    "load_config",
    "resolve_config_path",
    "create_default_config",
    "SAMPLE_CONFIG",
]

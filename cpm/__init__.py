"""
cpm: Contract Package Manager for Neo N3.

Downloads deployed contracts into a local neo-express chain and generates
client SDKs (Go, Python, Java, C#, TypeScript) from contract manifests.

    from cpm import GenerateConfig, Language, ScriptHash, SdkMode, generate_sdk, load_manifest

    cfg = GenerateConfig(
        manifest=load_manifest("contract.manifest.json"),
        contract_hash=ScriptHash.from_string_le("0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5"),
        destination="cpm_out/offchain/ts/",
        mode=SdkMode.OFFCHAIN,
    )
    generate_sdk(cfg, Language.TYPESCRIPT)
"""

from __future__ import annotations

from .codegen import GenerateConfig, Language, SdkMode, generate_sdk, render_sdk
from .errors import (
    ConfigError,
    CpmError,
    DownloadError,
    GenerationError,
    ManifestError,
    RpcError,
    TemplateError,
    UnmappedTypeError,
    UnsupportedTargetError,
)
from .hashes import ScriptHash
from .manifest import Manifest, load_manifest, parse_manifest
from .version import __version__

__all__ = [
    "__version__",
    "ScriptHash",
    "Manifest",
    "load_manifest",
    "parse_manifest",
    "Language",
    "SdkMode",
    "GenerateConfig",
    "generate_sdk",
    "render_sdk",
    "CpmError",
    "ManifestError",
    "UnmappedTypeError",
    "UnsupportedTargetError",
    "TemplateError",
    "GenerationError",
    "ConfigError",
    "DownloadError",
    "RpcError",
]

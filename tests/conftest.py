"""
Shared pytest fixtures:
- The sample manifest (tests/fixtures/sample.manifest.json) as dict and model
- A fixed script hash
- In-memory output sink
- A temporary working directory with a cpm.yaml
- Logging reset so one test's `configure()` does not leak into the next
"""
from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict

import pytest

from cpm.codegen import MemorySink
from cpm.hashes import ScriptHash
from cpm.manifest import Manifest, parse_manifest

FIXTURES = Path(__file__).resolve().parent / "fixtures"

# NEO token hash in its little-endian display form
SAMPLE_HASH = "0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5"

SAMPLE_CONFIG_YAML = """\
defaults:
  contract-source-network: testnet
  contract-destination: NeoExpress
  contract-generate-sdk: true
  on-chain:
    languages: [go]
  off-chain:
    languages: [python, ts]
contracts:
  - label: NEO
    script-hash: "0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5"
tools:
  neo-express:
    executable-path: null
    config-path: default.neo-express
networks:
  - label: testnet
    hosts:
      - "https://testnet1.example:443"
      - "https://testnet2.example:443"
"""


@pytest.fixture(scope="session")
def _sample_manifest_raw() -> Dict[str, Any]:
    return json.loads((FIXTURES / "sample.manifest.json").read_text(encoding="utf-8"))


@pytest.fixture
def sample_manifest_dict(_sample_manifest_raw: Dict[str, Any]) -> Dict[str, Any]:
    """A fresh, mutable copy of the sample manifest document."""
    return copy.deepcopy(_sample_manifest_raw)


@pytest.fixture
def sample_manifest(sample_manifest_dict: Dict[str, Any]) -> Manifest:
    return parse_manifest(sample_manifest_dict)


@pytest.fixture
def script_hash() -> ScriptHash:
    return ScriptHash.from_string_le(SAMPLE_HASH)


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary cwd holding a cpm.yaml; CPM_CONFIG is cleared."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CPM_CONFIG", raising=False)
    (tmp_path / "cpm.yaml").write_text(SAMPLE_CONFIG_YAML, encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_logging():
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if getattr(h, "_cpm_handler", False):
            root.removeHandler(h)
    root.setLevel(level)


@pytest.fixture
def render(sample_manifest, script_hash):
    """``render(language, mode)`` -> rendered files for the sample manifest."""
    from cpm.codegen import GenerateConfig, render_sdk

    def _render(language: str, mode: str, manifest: Manifest = None):
        cfg = GenerateConfig(
            manifest=manifest or sample_manifest,
            contract_hash=script_hash,
            destination="out/",
            mode=mode,
        )
        return render_sdk(cfg, language)

    return _render

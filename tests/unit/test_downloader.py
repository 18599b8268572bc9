from __future__ import annotations

import subprocess

import pytest

from cpm import downloader as dl
from cpm.downloader import NeoExpressDownloader
from cpm.errors import DownloadError


class _Runs:
    """Records subprocess.run calls and answers with canned results."""

    def __init__(self, *results):
        self.calls = []
        self.results = list(results)

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        res = self.results.pop(0) if self.results else subprocess.CompletedProcess(cmd, 0, "", "")
        if isinstance(res, BaseException):
            raise res
        return res


@pytest.fixture
def linux(monkeypatch):
    monkeypatch.setattr(dl.sys, "platform", "linux")


def test_verifies_executable_on_construction(monkeypatch, linux):
    runs = _Runs()
    monkeypatch.setattr(dl.subprocess, "run", runs)
    NeoExpressDownloader("default.neo-express")
    cmd, kwargs = runs.calls[0]
    assert cmd == ["neoxp", "-h"]
    assert kwargs["check"] is True


def test_missing_executable_gives_install_hint(monkeypatch, linux):
    monkeypatch.setattr(dl.subprocess, "run", _Runs(FileNotFoundError(2, "No such file", "neoxp")))
    with pytest.raises(DownloadError) as ei:
        NeoExpressDownloader("default.neo-express")
    assert "dotnet tool install Neo.Express -g" in str(ei.value)


def test_bad_configured_path(monkeypatch, linux):
    err = subprocess.CalledProcessError(1, ["/opt/neoxp", "-h"])
    monkeypatch.setattr(dl.subprocess, "run", _Runs(err))
    with pytest.raises(DownloadError) as ei:
        NeoExpressDownloader("default.neo-express", "/opt/neoxp")
    assert "executable-path" in str(ei.value)


def test_macos_runs_through_bash(monkeypatch):
    monkeypatch.setattr(dl.sys, "platform", "darwin")
    runs = _Runs()
    monkeypatch.setattr(dl.subprocess, "run", runs)
    NeoExpressDownloader("default.neo-express")
    assert runs.calls[0][0] == ["bash", "-c", "neoxp -h"]


def test_explicit_path_wins_on_macos(monkeypatch):
    monkeypatch.setattr(dl.sys, "platform", "darwin")
    runs = _Runs()
    monkeypatch.setattr(dl.subprocess, "run", runs)
    NeoExpressDownloader("default.neo-express", "/opt/neoxp")
    assert runs.calls[0][0] == ["/opt/neoxp", "-h"]


def test_download_command_and_output(monkeypatch, linux, script_hash):
    ok = subprocess.CompletedProcess([], 0, "Contract downloaded\n", "")
    runs = _Runs(subprocess.CompletedProcess([], 0, "", ""), ok)
    monkeypatch.setattr(dl.subprocess, "run", runs)
    out = NeoExpressDownloader("my.neo-express").download_contract(script_hash, "http://seed1.example:10332")
    assert out == "[NEOXP]Contract downloaded\n"
    assert runs.calls[1][0] == [
        "neoxp", "contract", "download", "-i", "my.neo-express", "--force",
        "0xef4073a0f2b305a38ec4050e4d3d28bc40ea63f5", "http://seed1.example:10332",
    ]


def test_download_failure_carries_stderr(monkeypatch, linux, script_hash):
    failed = subprocess.CompletedProcess([], 1, "", "contract not found")
    monkeypatch.setattr(dl.subprocess, "run", _Runs(subprocess.CompletedProcess([], 0, "", ""), failed))
    d = NeoExpressDownloader("default.neo-express")
    with pytest.raises(DownloadError) as ei:
        d.download_contract(script_hash, "http://h")
    assert ei.value.output == "[NEOXP]contract not found"
    assert ei.value.host == "http://h"


def test_skip_verification(monkeypatch, linux):
    runs = _Runs()
    monkeypatch.setattr(dl.subprocess, "run", runs)
    NeoExpressDownloader("default.neo-express", verify=False)
    assert runs.calls == []

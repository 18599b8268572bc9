"""
Contract downloaders.

Downloading a contract means copying its deployed state from a network into
a local development chain. Only neo-express is supported; it is driven
through its ``neoxp`` command line.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import List, Optional, Protocol, Sequence

from .errors import DownloadError
from .hashes import ScriptHash

log = logging.getLogger(__name__)

NEOXP = "neoxp"
OUTPUT_PREFIX = "[NEOXP]"

_INSTALL_HINT = (
    "Could not find 'neoxp' executable in $PATH. Please install neoxp globally using "
    "'dotnet tool install Neo.Express -g' or specify the 'executable-path' in cpm.yaml "
    "in the neo-express tools section"
)


class Downloader(Protocol):
    def download_contract(self, script_hash: ScriptHash, host: str) -> str:
        """Download the contract; returns the tool output or raises DownloadError."""
        ...


def _on_macos() -> bool:
    return sys.platform == "darwin"


class NeoExpressDownloader:
    """
    Downloads contracts with ``neoxp contract download``.

    On macOS without an explicit executable path ``neoxp`` is run through
    ``bash -c`` so that a login shell's PATH (dotnet tools) applies.
    """

    def __init__(self, config_path: str, executable_path: Optional[str] = None, *, verify: bool = True) -> None:
        self.config_path = config_path
        self.executable_path = executable_path
        if verify:
            self._verify()

    def _command(self, args: Sequence[str]) -> List[str]:
        if self.executable_path:
            return [self.executable_path, *args]
        if _on_macos():
            return ["bash", "-c", " ".join([NEOXP, *args])]
        return [NEOXP, *args]

    def _verify(self) -> None:
        cmd = self._command(["-h"])
        try:
            subprocess.run(cmd, capture_output=True, check=True)
        except (OSError, subprocess.CalledProcessError) as e:
            if self.executable_path:
                raise DownloadError(
                    f"could not find 'neoxp' executable in the configured executable-path: {e}"
                ) from e
            raise DownloadError(_INSTALL_HINT) from e
        log.debug("using %s", " ".join(cmd))

    def download_contract(self, script_hash: ScriptHash, host: str) -> str:
        args = ["contract", "download", "-i", self.config_path, "--force", "0x" + script_hash.string_le(), host]
        cmd = self._command(args)
        log.debug("running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise DownloadError(f"failed to run neoxp: {e}", host=host) from e
        if proc.returncode != 0:
            raise DownloadError(
                f"neoxp exited with status {proc.returncode}",
                host=host,
                output=OUTPUT_PREFIX + (proc.stderr or ""),
            )
        return OUTPUT_PREFIX + (proc.stdout or "")


__all__ = ["Downloader", "NeoExpressDownloader", "NEOXP", "OUTPUT_PREFIX"]

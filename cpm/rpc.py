from __future__ import annotations

"""
Minimal Neo N3 JSON-RPC client (sync, httpx).

Only what cpm needs: ``getcontractstate`` to fetch a deployed contract's
manifest. Transient transport failures and 429/5xx responses are retried
with jittered exponential backoff; JSON-RPC error objects are not.

Example:
    from cpm.rpc import NeoRpcClient
    with NeoRpcClient("https://testnet1.neo.coz.io:443") as rpc:
        manifest = rpc.fetch_manifest(ScriptHash.from_string_le("0xef40...63f5"))
"""

import json
import logging
import random
import time
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Sequence, Union

import httpx

from .errors import RpcError
from .hashes import ScriptHash
from .manifest import Manifest, parse_manifest
from .version import user_agent

log = logging.getLogger(__name__)

JSON = Union[dict, list, str, int, float, bool, None]
Params = Union[Sequence[Any], Mapping[str, Any], None]

# codes used for failures that never reached a JSON-RPC server
TRANSPORT_ERROR = -32098
INTERNAL_ERROR = -32603


def _is_retriable_http(status: int) -> bool:
    return status in (429, 500, 502, 503, 504)


def _jitter_backoff(base: float, factor: float, attempt: int, jitter: float) -> float:
    return base * (factor ** max(attempt - 1, 0)) + random.random() * jitter


class _Retriable(Exception):
    pass


# transport failures worth another attempt; other httpx.TransportError kinds are not
_TRANSIENT = (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError, httpx.ProxyError)


@dataclass
class NeoRpcClient:
    """Synchronous JSON-RPC 2.0 client for a single Neo node."""

    url: str
    timeout: float = 10.0
    max_retries: int = 2
    backoff_base: float = 0.15
    backoff_factor: float = 1.8
    backoff_jitter: float = 0.2
    headers: Optional[Mapping[str, str]] = None
    transport: Optional[httpx.BaseTransport] = None
    sleep: Callable[[float], None] = time.sleep
    _ids: Iterator[int] = field(default_factory=lambda: count(1))
    _client: httpx.Client = field(init=False, repr=False)

    def __post_init__(self) -> None:
        merged: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": user_agent(),
        }
        if self.headers:
            merged.update(dict(self.headers))
        self._client = httpx.Client(timeout=self.timeout, headers=merged, transport=self.transport)

    def __enter__(self) -> "NeoRpcClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        self._client.close()

    # --- public API ------------------------------------------------------

    def request(self, method: str, params: Params = None) -> JSON:
        """Perform one JSON-RPC call and return its ``result`` or raise RpcError."""
        payload = self._make_payload(method, params)
        last: Optional[Exception] = None
        for attempt in range(1, self.max_retries + 2):
            try:
                return self._send_once(payload)
            except _Retriable as e:
                last = e
                if attempt > self.max_retries:
                    break
                delay = _jitter_backoff(self.backoff_base, self.backoff_factor, attempt, self.backoff_jitter)
                log.debug("%s to %s failed (%s), retrying in %.2fs", method, self.url, e, delay)
                self.sleep(delay)
        raise RpcError(
            code=TRANSPORT_ERROR,
            message="RPC transport failed",
            data=str(last),
            method=method,
            host=self.url,
        )

    def get_contract_state(self, script_hash: ScriptHash) -> Dict[str, Any]:
        result = self.request("getcontractstate", ["0x" + script_hash.string_le()])
        if not isinstance(result, dict):
            raise RpcError(
                code=INTERNAL_ERROR,
                message="unexpected getcontractstate result",
                data=result,
                method="getcontractstate",
                host=self.url,
            )
        return result

    def fetch_manifest(self, script_hash: ScriptHash) -> Manifest:
        state = self.get_contract_state(script_hash)
        if "manifest" not in state:
            raise RpcError(
                code=INTERNAL_ERROR,
                message="contract state has no manifest",
                method="getcontractstate",
                host=self.url,
            )
        return parse_manifest(state["manifest"])

    # --- internals -------------------------------------------------------

    def _make_payload(self, method: str, params: Params) -> Dict[str, Any]:
        if params is None:
            params = []
        elif isinstance(params, Mapping):
            params = dict(params)
        else:
            params = list(params)
        return {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}

    def _send_once(self, payload: Dict[str, Any]) -> JSON:
        method = payload["method"]
        body = json.dumps(payload, separators=(",", ":"))
        try:
            r = self._client.post(self.url, content=body)
        except _TRANSIENT as e:
            raise _Retriable(f"{type(e).__name__}: {e}") from e
        except (httpx.TransportError, httpx.InvalidURL) as e:
            # bad scheme or malformed URL, not retried
            raise RpcError(
                code=TRANSPORT_ERROR,
                message="RPC transport failed",
                data=f"{type(e).__name__}: {e}",
                method=method,
                host=self.url,
            ) from e
        if _is_retriable_http(r.status_code):
            raise _Retriable(f"HTTP {r.status_code}")
        try:
            resp = r.json()
        except ValueError as e:
            raise RpcError(
                code=INTERNAL_ERROR,
                message="Non-JSON response from RPC",
                data=f"HTTP {r.status_code}: {r.text[:256]}",
                method=method,
                host=self.url,
            ) from e
        if not isinstance(resp, dict):
            raise RpcError(code=INTERNAL_ERROR, message="Invalid JSON-RPC response type", method=method, host=self.url)
        if resp.get("error") is not None:
            err = resp["error"] if isinstance(resp["error"], dict) else {"message": str(resp["error"])}
            raise RpcError(
                code=int(err.get("code", INTERNAL_ERROR)),
                message=str(err.get("message", "Unknown error")),
                data=err.get("data"),
                method=method,
                host=self.url,
            )
        if "result" not in resp:
            raise RpcError(code=INTERNAL_ERROR, message="Malformed JSON-RPC response", data=resp, method=method, host=self.url)
        return resp["result"]


def fetch_manifest(script_hash: ScriptHash, host: str, *, timeout: float = 10.0) -> Manifest:
    """Fetch the manifest of ``script_hash`` from a single node."""
    with NeoRpcClient(host, timeout=timeout) as rpc:
        return rpc.fetch_manifest(script_hash)


__all__ = ["NeoRpcClient", "fetch_manifest", "TRANSPORT_ERROR", "INTERNAL_ERROR"]

"""
cpm.log
-------

Logging setup for the command-line tool:

- concise coloured text lines or JSON lines
- context fields (contract, language, mode, host) carried via `contextvars`
  so nested generation steps do not have to pass them around

Usage
-----
    from cpm import log as clog

    clog.configure(level="INFO")          # once at process start
    logger = logging.getLogger(__name__)   # everywhere else

    with clog.scope(contract="NEO", language="python"):
        logger.info("generating")

Library modules only ever call `logging.getLogger(__name__)`; nothing is
printed unless the application calls `configure`.
"""

from __future__ import annotations

import datetime as _dt
import io
import json
import logging
import os
import sys
import traceback
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

_LOG_CONTEXT: ContextVar[Dict[str, Any]] = ContextVar("_CPM_LOG_CONTEXT", default={})

CONTEXT_KEYS = ("contract", "language", "mode", "host")

# LogRecord attributes that are never treated as structured extras.
_RECORD_FIELDS = frozenset(
    (
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "asctime",
    )
)


def context() -> Dict[str, Any]:
    """Return a *copy* of the active logging context."""
    return dict(_LOG_CONTEXT.get())


def bind(**fields: Any) -> None:
    cur = dict(_LOG_CONTEXT.get())
    cur.update({k: _coerce_value(v) for k, v in fields.items()})
    _LOG_CONTEXT.set(cur)


def unbind(*keys: str) -> None:
    cur = dict(_LOG_CONTEXT.get())
    for k in keys:
        cur.pop(k, None)
    _LOG_CONTEXT.set(cur)


@contextmanager
def scope(**fields: Any) -> Iterator[None]:
    """Bind fields for the duration of a block, restoring the prior context."""
    prev = dict(_LOG_CONTEXT.get())
    try:
        bind(**fields)
        yield
    finally:
        _LOG_CONTEXT.set(prev)


def _utcnow_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).isoformat(timespec="milliseconds")


_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_RESET = "\x1b[0m"
_GREY = "\x1b[90m"
_CYAN = "\x1b[36m"
_LEVEL_COLOR = {
    logging.DEBUG: _GREY,
    logging.INFO: "\x1b[32m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[1m\x1b[35m",
}


def _supports_color(stream: io.TextIOBase) -> bool:
    try:
        return stream.isatty() and os.environ.get("NO_COLOR") is None
    except (AttributeError, ValueError):
        return False


def _coerce_value(v: Any) -> Any:
    if v is None or isinstance(v, (bool, int, float, str, list, dict)):
        return v
    if isinstance(v, (bytes, bytearray)):
        return v.hex()
    if isinstance(v, Path):
        return str(v)
    return str(v)


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in record.__dict__.items():
        if k.startswith("_") or k in _RECORD_FIELDS:
            continue
        out[k] = _coerce_value(v)
    return out


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": _utcnow_iso(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(context())
        for k, v in _extras(record).items():
            payload.setdefault(k, v)
        if record.exc_info:
            payload["err"] = "".join(traceback.format_exception(*record.exc_info)).rstrip()
        return json.dumps(payload, separators=(",", ":"), default=str)


class TextFormatter(logging.Formatter):
    """
    Human-friendly one-liner:
      2025-01-05T12:34:56.789+00:00 | INFO  | cpm.codegen.generate | contract=NEO | Created ...
    """

    def __init__(self, stream: io.TextIOBase):
        super().__init__()
        self._color = _supports_color(stream)

    def format(self, record: logging.LogRecord) -> str:
        ctx = context()
        ctx_str = " ".join(f"{k}={ctx[k]}" for k in CONTEXT_KEYS if ctx.get(k) is not None)
        extras = " ".join(f"{k}={v}" for k, v in _extras(record).items() if k not in ctx)

        lvl = f"{record.levelname:<5}"
        name = record.name
        ts = _utcnow_iso()
        if self._color:
            lvl = f"{_LEVEL_COLOR.get(record.levelno, '')}{lvl}{_RESET}"
            name = f"{_CYAN}{name}{_RESET}"
            ts = f"{_GREY}{ts}{_RESET}"

        line = f"{ts} | {lvl} | {name}"
        if ctx_str:
            line += f" | {ctx_str}"
        if extras:
            line += f" {extras}"
        line += f" | {record.getMessage()}"
        if record.exc_info:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info)).rstrip()
        return line


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    try:
        return _LEVELS[str(level).strip().upper()]
    except KeyError:
        raise ValueError(f"unknown log level: {level!r}") from None


def _decide_json(json_flag: Optional[bool]) -> bool:
    if json_flag is not None:
        return json_flag
    return os.environ.get("CPM_LOG_FORMAT", "text").strip().lower() == "json"


def configure(
    *,
    level: str | int = "INFO",
    json: Optional[bool] = None,
    stream: Optional[io.TextIOBase] = None,
) -> None:
    """
    Configure the root logger with a single console handler.

    `json=None` reads CPM_LOG_FORMAT (text|json). Calling this again replaces
    the previous handler instead of stacking another one.
    """
    if stream is None:
        stream = sys.stderr
    root = logging.getLogger()
    root.setLevel(_coerce_level(level))
    for h in list(root.handlers):
        if getattr(h, "_cpm_handler", False):
            root.removeHandler(h)

    console = logging.StreamHandler(stream)
    console.setFormatter(JSONFormatter() if _decide_json(json) else TextFormatter(stream))
    console._cpm_handler = True  # type: ignore[attr-defined]
    root.addHandler(console)


__all__ = [
    "configure",
    "context",
    "bind",
    "unbind",
    "scope",
    "JSONFormatter",
    "TextFormatter",
    "CONTEXT_KEYS",
]

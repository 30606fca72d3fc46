"""Minimal structured logging helper.

Wraps print() to emit one record per line, either as key=value pairs or as a
JSON object, so generation traces stay greppable without configuring
handlers.

Usage:
    from roomgrid.logging_utils import get_logger
    log = get_logger("roomgrid.layout")
    log.info(event="layout_complete", rooms=12)

Every record carries ``level``, ``ts`` and ``logger``; fields set to None are
dropped. In key=value form strings have spaces replaced with underscores.
Warnings and errors go to stderr so stdout stays clean for CLI output.

Environment (read on every call, so tests may change it at runtime):
    ROOMGRID_LOG_LEVEL  debug | info | warn | error (default: info)
    ROOMGRID_LOG_JSON   truthy to emit JSON lines
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")
_STDERR_FROM = LEVELS["warn"]


def current_level() -> int:
    return LEVELS.get(os.getenv("ROOMGRID_LOG_LEVEL", "info").lower(), LEVELS["info"])


def json_mode() -> bool:
    return os.getenv("ROOMGRID_LOG_JSON", "0") in _TRUTHY


def _kv(key: str, value) -> str:
    if isinstance(value, (int, float)):
        return f"{key}={value}"
    return f"{key}=" + str(value).replace(" ", "_")


def _format(level: str, logger: str, fields: dict) -> str:
    ts = int(time.time())
    kept = {k: v for k, v in fields.items() if v is not None}
    if json_mode():
        return json.dumps({**kept, "level": level, "ts": ts, "logger": logger}, separators=(",", ":"), default=str)
    head = [f"level={level}", f"ts={ts}"]
    return " ".join(head + [_kv(k, v) for k, v in kept.items()] + [_kv("logger", logger)])


class _Logger:
    def __init__(self, name: str):
        self.name = name

    def enabled_for(self, level: str) -> bool:
        return LEVELS[level] >= current_level()

    def _emit(self, level: str, fields: dict) -> None:
        if not self.enabled_for(level):
            return
        stream = sys.stderr if LEVELS[level] >= _STDERR_FROM else sys.stdout
        print(_format(level, self.name, fields), file=stream)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)


_LOGGERS: dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    """Return the shared logger for ``name``, creating it on first use."""
    return _LOGGERS.setdefault(name, _Logger(name))

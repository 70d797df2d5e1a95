"""Centralized environment variable helpers."""

from __future__ import annotations

import os
from collections.abc import Mapping

from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


def getenv(name: str, default: str | None = None) -> str | None:
    return os.environ.get(name, default)


def getenv_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ScriptError(f"{name} must be a boolean flag, got `{raw}`", ERR_CONFIG, kind="invalid_env")


def overlay(extra: Mapping[str, str], base: Mapping[str, str] | None = None) -> dict[str, str]:
    env = dict(os.environ if base is None else base)
    env.update(extra)
    return env

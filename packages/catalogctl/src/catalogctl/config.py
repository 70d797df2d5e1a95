from __future__ import annotations

import shlex
from dataclasses import dataclass

from .core.context import LogFormat
from .core.env import getenv, getenv_bool
from .errors import ScriptError
from .exit_codes import ERR_CONFIG

DEFAULT_NPM = ("npm",)
DEFAULT_HYDRATE_SCRIPT = "scripts:hydrate-content"
DEFAULT_DEV_SCRIPT = "dev:local"
DEFAULT_INTERRUPT_GRACE = 5.0


@dataclass(frozen=True)
class LauncherConfig:
    npm_command: tuple[str, ...] = DEFAULT_NPM
    hydrate_script: str = DEFAULT_HYDRATE_SCRIPT
    dev_script: str = DEFAULT_DEV_SCRIPT
    log_format: LogFormat = "text"
    quiet: bool = False
    interrupt_grace_seconds: float = DEFAULT_INTERRUPT_GRACE

    @classmethod
    def from_env(cls) -> "LauncherConfig":
        return cls(
            npm_command=_npm_command(getenv("CATALOGCTL_NPM")),
            hydrate_script=getenv("CATALOGCTL_HYDRATE_SCRIPT") or DEFAULT_HYDRATE_SCRIPT,
            dev_script=getenv("CATALOGCTL_DEV_SCRIPT") or DEFAULT_DEV_SCRIPT,
            log_format=_log_format(getenv("CATALOGCTL_LOG_FORMAT")),
            quiet=getenv_bool("CATALOGCTL_QUIET"),
            interrupt_grace_seconds=_grace(getenv("CATALOGCTL_INTERRUPT_GRACE")),
        )


def _npm_command(raw: str | None) -> tuple[str, ...]:
    if raw is None:
        return DEFAULT_NPM
    parts = tuple(shlex.split(raw))
    if not parts:
        raise ScriptError("CATALOGCTL_NPM must name a command", ERR_CONFIG, kind="invalid_env")
    return parts


def _log_format(raw: str | None) -> LogFormat:
    value = (raw or "text").strip().lower()
    if value == "text":
        return "text"
    if value == "json":
        return "json"
    raise ScriptError(f"CATALOGCTL_LOG_FORMAT must be `text` or `json`, got `{raw}`", ERR_CONFIG, kind="invalid_env")


def _grace(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_INTERRUPT_GRACE
    try:
        value = float(raw)
    except ValueError as exc:
        raise ScriptError(f"CATALOGCTL_INTERRUPT_GRACE must be a number, got `{raw}`", ERR_CONFIG, kind="invalid_env") from exc
    if value < 0:
        raise ScriptError("CATALOGCTL_INTERRUPT_GRACE must not be negative", ERR_CONFIG, kind="invalid_env")
    return value

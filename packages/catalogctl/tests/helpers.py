from __future__ import annotations

import json
import os
import shlex
import subprocess
import sys
from pathlib import Path

from catalogctl.config import LauncherConfig

ROOT = Path(__file__).resolve().parents[3]
FAKE_NPM = Path(__file__).resolve().parent / "fixtures" / "fake_npm.py"
ENTRY_SCRIPT = ROOT / "scripts" / "start_catalog_locally.py"


def fake_npm_command() -> tuple[str, ...]:
    return (sys.executable, str(FAKE_NPM))


def fake_npm_config(**overrides: object) -> LauncherConfig:
    fields: dict[str, object] = {"npm_command": fake_npm_command(), "quiet": True}
    fields.update(overrides)
    return LauncherConfig(**fields)  # type: ignore[arg-type]


def read_npm_log(path: Path) -> list[dict[str, object]]:
    if not path.exists():
        return []
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def parse_json_events(stderr: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in stderr.splitlines() if line.startswith("{")]


def run_entry_script(*args: str, env_overrides: dict[str, str], cwd: Path) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["CATALOGCTL_NPM"] = shlex.join(fake_npm_command())
    env.setdefault("RUN_ID", "pytest-run")
    env.update(env_overrides)
    return subprocess.run(
        [sys.executable, str(ENTRY_SCRIPT), *args],
        cwd=cwd,
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )


class ScriptedPopen:
    """`Popen` stand-in whose `wait()` calls follow a script.

    Each outcome is an exit status to return, "interrupt" to raise
    KeyboardInterrupt, or "timeout" to raise TimeoutExpired (only when a timeout
    was passed; a blocking wait skips it).
    """

    def __init__(self, outcomes: list[object]) -> None:
        self.outcomes = list(outcomes)
        self.waits: list[float | None] = []
        self.terminated = False
        self.killed = False
        self.reaped = False
        self.closed = False

    def __enter__(self) -> "ScriptedPopen":
        return self

    def __exit__(self, *exc: object) -> None:
        self.closed = True

    def wait(self, timeout: float | None = None) -> int:
        self.waits.append(timeout)
        outcome = self.outcomes.pop(0)
        while outcome == "timeout" and timeout is None:
            outcome = self.outcomes.pop(0)
        if outcome == "interrupt":
            raise KeyboardInterrupt
        if outcome == "timeout":
            raise subprocess.TimeoutExpired("npm", timeout or 0)
        self.reaped = True
        return int(outcome)  # type: ignore[call-overload]

    def terminate(self) -> None:
        self.terminated = True

    def kill(self) -> None:
        self.killed = True

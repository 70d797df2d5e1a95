from __future__ import annotations

import shutil
import subprocess
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..errors import ChildProcessFailure
from ..exit_codes import ERR_INTERRUPTED, ERR_NOT_EXECUTABLE, ERR_SPAWN, from_returncode


@dataclass(frozen=True)
class CommandResult:
    code: int
    stdout: str
    stderr: str
    duration_ms: int

    @property
    def combined_output(self) -> str:
        return (self.stdout + self.stderr).strip()


def run_command(cmd: list[str], cwd: Path, timeout_seconds: int = 0) -> CommandResult:
    started = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            text=True,
            capture_output=True,
            check=False,
            timeout=(timeout_seconds if timeout_seconds > 0 else None),
        )
    except subprocess.TimeoutExpired as exc:
        return CommandResult(
            code=124,
            stdout=str(exc.stdout or ""),
            stderr=(str(exc.stderr or "") + f"\ncommand timed out after {timeout_seconds}s").strip(),
            duration_ms=int((time.monotonic() - started) * 1000),
        )
    except OSError as exc:
        return CommandResult(
            code=ERR_SPAWN,
            stdout="",
            stderr=str(exc),
            duration_ms=int((time.monotonic() - started) * 1000),
        )
    return CommandResult(
        code=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
        duration_ms=int((time.monotonic() - started) * 1000),
    )


def resolve_executable(cmd: Sequence[str]) -> list[str]:
    """Resolve `cmd[0]` on PATH so wrappers such as `npm.cmd` are found on Windows."""
    if not cmd:
        return []
    found = shutil.which(cmd[0])
    return [found or cmd[0], *cmd[1:]]


def _reap_after_interrupt(proc: subprocess.Popen[bytes], grace_seconds: float) -> None:
    # A timeout or another Ctrl-C moves on to the next step: grace, terminate, kill.
    for step in ("grace", "terminate"):
        if step == "terminate":
            proc.terminate()
        try:
            proc.wait(timeout=grace_seconds)
            return
        except (subprocess.TimeoutExpired, KeyboardInterrupt):
            continue
    proc.kill()
    while True:
        try:
            proc.wait()
            return
        except KeyboardInterrupt:
            continue


def run_inherited(
    cmd: Sequence[str],
    cwd: Path,
    env: Mapping[str, str],
    grace_seconds: float = 5.0,
) -> CommandResult:
    """Run `cmd` in the foreground with stdin/stdout/stderr inherited from this process.

    The child is always waited for before returning or raising. On Ctrl-C the child
    has already received SIGINT through the terminal's process group, so it gets
    `grace_seconds` to exit on its own before being terminated, and then killed.
    Further Ctrl-C presses skip ahead to the next step.
    """
    argv = resolve_executable(cmd)
    started = time.monotonic()
    try:
        proc = subprocess.Popen(argv, cwd=cwd, env=dict(env))
    except PermissionError as exc:
        raise ChildProcessFailure(f"cannot execute `{argv[0]}`: {exc}", ERR_NOT_EXECUTABLE, kind="spawn_failed") from exc
    except OSError as exc:
        raise ChildProcessFailure(f"cannot start `{argv[0]}`: {exc}", ERR_SPAWN, kind="spawn_failed") from exc
    with proc:
        try:
            returncode = proc.wait()
        except KeyboardInterrupt:
            _reap_after_interrupt(proc, grace_seconds)
            raise ChildProcessFailure("interrupted", ERR_INTERRUPTED, kind="interrupted") from None
    return CommandResult(
        code=from_returncode(returncode),
        stdout="",
        stderr="",
        duration_ms=int((time.monotonic() - started) * 1000),
    )

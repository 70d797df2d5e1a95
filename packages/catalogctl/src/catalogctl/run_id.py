from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from .core.process import run_command


def read_git_sha(repo_root: Path) -> str:
    """Short HEAD sha of `repo_root`, or "unknown" outside a checkout or without git."""
    res = run_command(["git", "rev-parse", "--short", "HEAD"], repo_root)
    sha = res.stdout.strip() if res.code == 0 else ""
    return sha or "unknown"


def build_run_id(git_sha: str, prefix: str = "catalog") -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return f"{prefix}-{stamp}-{git_sha}"


def make_run_id(repo_root: Path, prefix: str = "catalog") -> str:
    return build_run_id(read_git_sha(repo_root), prefix)

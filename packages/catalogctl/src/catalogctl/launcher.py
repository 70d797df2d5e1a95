"""Start a catalog locally: hydrate its content, then run the dev server.

`run(["acme"])` runs, from the catalog root,

    npm run scripts:hydrate-content   (NODE_ENV=development)
    npm run dev:local

with PROJECT_DIR=<root>/examples/acme and CATALOG_DIR=<root>/ exported to both.
The dev server only starts when hydration exits 0.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from .config import LauncherConfig
from .core.context import LaunchContext
from .core.env import getenv
from .core.logging import log_event
from .errors import ChildProcessFailure, ScriptError
from .exit_codes import ERR_CONFIG
from .pipeline import Runner, Stage, default_runner, run_pipeline

HYDRATE_STAGE = "hydrate-content"
DEV_STAGE = "dev-local"


def package_repo_root() -> Path:
    return Path(__file__).resolve().parents[4]


def resolve_catalog_root(explicit: Path | str | None = None) -> Path:
    if explicit is not None:
        return Path(explicit)
    from_env = getenv("CATALOG_ROOT")
    if from_env:
        return Path(from_env)
    # Only a source checkout (editable install) has examples/ above the package.
    root = package_repo_root()
    if not (root / "examples").is_dir():
        raise ScriptError(
            f"no examples/ directory under {root}; set CATALOG_ROOT to the catalog checkout",
            ERR_CONFIG,
            kind="no_catalog_root",
        )
    return root


def build_stages(ctx: LaunchContext, config: LauncherConfig) -> list[Stage]:
    shared = ctx.child_env()
    return [
        Stage(
            name=HYDRATE_STAGE,
            command=(*config.npm_command, "run", config.hydrate_script),
            env={"NODE_ENV": "development", **shared},
        ),
        Stage(
            name=DEV_STAGE,
            command=(*config.npm_command, "run", config.dev_script),
            env=shared,
            depends_on=(HYDRATE_STAGE,),
        ),
    ]


def run(
    argv: Sequence[str],
    catalog_root: Path | str | None = None,
    config: LauncherConfig | None = None,
    runner: Runner | None = None,
) -> int:
    catalog_name = argv[0] if argv else None
    try:
        cfg = config or LauncherConfig.from_env()
        ctx = LaunchContext.from_args(
            catalog_name,
            resolve_catalog_root(catalog_root),
            log_format=cfg.log_format,
            quiet=cfg.quiet,
        )
    except ScriptError as exc:
        print(f"catalogctl: {exc}", file=sys.stderr)
        return exc.code
    log_event(
        ctx,
        "info",
        "launch",
        "start",
        catalog=ctx.catalog_name,
        catalog_root=str(ctx.catalog_root),
        project_dir=str(ctx.project_dir),
    )
    try:
        result = run_pipeline(ctx, build_stages(ctx, cfg), runner or default_runner(cfg.interrupt_grace_seconds))
        failed = result.failed_stage
        if failed is not None:
            raise ChildProcessFailure(
                f"exited with status {result.code}",
                result.code,
                kind="nonzero_exit",
                stage=failed,
            )
    except ScriptError as exc:
        log_event(
            ctx,
            "error",
            "launch",
            "launch-failed",
            kind=exc.kind,
            code=exc.code,
            stage=getattr(exc, "stage", ""),
            error=str(exc),
        )
        return exc.code
    log_event(ctx, "info", "launch", "finish", code=result.code)
    return result.code


def main(argv: list[str] | None = None) -> int:
    return run(sys.argv[1:] if argv is None else argv)

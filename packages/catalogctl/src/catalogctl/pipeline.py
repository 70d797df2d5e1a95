"""Ordered stage pipeline with declared dependencies.

Stages run strictly one after another in declaration order. A stage only starts
when every stage it depends on finished with exit code 0, and nothing runs after
the first failure.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .core.context import LaunchContext
from .core.env import overlay
from .core.logging import log_event
from .core.process import CommandResult, run_inherited
from .errors import ChildProcessFailure, ScriptError
from .exit_codes import ERR_CONFIG

Runner = Callable[[Sequence[str], Path, Mapping[str, str]], CommandResult]


@dataclass(frozen=True)
class Stage:
    name: str
    command: tuple[str, ...]
    env: Mapping[str, str] = field(default_factory=dict)
    depends_on: tuple[str, ...] = ()


@dataclass(frozen=True)
class StageResult:
    name: str
    code: int
    duration_ms: int

    @property
    def ok(self) -> bool:
        return self.code == 0


@dataclass
class PipelineResult:
    results: list[StageResult] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def code(self) -> int:
        return self.results[-1].code if self.results else 0

    @property
    def ok(self) -> bool:
        return all(res.ok for res in self.results) and not self.skipped

    @property
    def failed_stage(self) -> str | None:
        for res in self.results:
            if not res.ok:
                return res.name
        return None


def validate_stages(stages: Sequence[Stage]) -> None:
    seen: set[str] = set()
    for stage in stages:
        if stage.name in seen:
            raise ScriptError(f"duplicate stage name: {stage.name}", ERR_CONFIG, kind="invalid_pipeline")
        if not stage.command:
            raise ScriptError(f"stage `{stage.name}` has an empty command", ERR_CONFIG, kind="invalid_pipeline")
        for dep in stage.depends_on:
            if dep not in seen:
                raise ScriptError(
                    f"stage `{stage.name}` depends on `{dep}` which is not declared before it",
                    ERR_CONFIG,
                    kind="invalid_pipeline",
                )
        seen.add(stage.name)


def default_runner(grace_seconds: float) -> Runner:
    def _run(cmd: Sequence[str], cwd: Path, env: Mapping[str, str]) -> CommandResult:
        return run_inherited(cmd, cwd, env, grace_seconds=grace_seconds)

    return _run


def run_pipeline(ctx: LaunchContext, stages: Sequence[Stage], runner: Runner) -> PipelineResult:
    validate_stages(stages)
    result = PipelineResult()
    succeeded: set[str] = set()
    for stage in stages:
        if result.failed_stage is not None or any(dep not in succeeded for dep in stage.depends_on):
            result.skipped.append(stage.name)
            log_event(ctx, "info", "pipeline", "stage-skipped", stage=stage.name)
            continue
        log_event(ctx, "info", "pipeline", "stage-start", stage=stage.name, command=" ".join(stage.command))
        try:
            res = runner(stage.command, ctx.catalog_root, overlay(stage.env))
        except ChildProcessFailure as exc:
            exc.stage = stage.name
            raise
        outcome = StageResult(name=stage.name, code=res.code, duration_ms=res.duration_ms)
        result.results.append(outcome)
        log_event(
            ctx,
            "info" if outcome.ok else "error",
            "pipeline",
            "stage-finish",
            stage=stage.name,
            code=outcome.code,
            duration_ms=outcome.duration_ms,
        )
        if outcome.ok:
            succeeded.add(stage.name)
    return result

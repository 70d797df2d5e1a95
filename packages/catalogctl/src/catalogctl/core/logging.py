from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ..contracts import validate_event

if TYPE_CHECKING:
    from .context import LaunchContext


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_event(ctx: LaunchContext, level: str, component: str, action: str, **fields: object) -> dict[str, object]:
    return {
        "ts": utc_now_iso(),
        "level": level,
        "run_id": ctx.run_id,
        "component": component,
        "action": action,
        **fields,
    }


def log_event(ctx: LaunchContext, level: str, component: str, action: str, **fields: object) -> None:
    # stdout belongs to the child processes; events always go to stderr.
    if ctx.quiet and level == "info":
        return
    payload = build_event(ctx, level, component, action, **fields)
    if ctx.log_json:
        validate_event(payload)
        sys.stderr.write(json.dumps(payload, sort_keys=True) + "\n")
        sys.stderr.flush()
        return
    core = f"ts={payload['ts']} level={level} run_id={ctx.run_id} component={component} action={action}"
    extras = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    sys.stderr.write((core if not extras else f"{core} {extras}") + "\n")
    sys.stderr.flush()

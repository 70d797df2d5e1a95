from __future__ import annotations

import json
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

import jsonschema

from ..errors import ScriptError
from ..exit_codes import ERR_VALIDATION
from .schemas import schemas_root

LOG_EVENT_SCHEMA = "catalogctl.log-event.v1"


@lru_cache(maxsize=1)
def load_event_schema() -> dict[str, Any]:
    path = schemas_root() / f"{LOG_EVENT_SCHEMA}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def validate_event(payload: Mapping[str, object]) -> None:
    try:
        jsonschema.validate(dict(payload), load_event_schema())
    except jsonschema.ValidationError as exc:
        field = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        action = payload.get("action", "?")
        raise ScriptError(
            f"log event `{action}` does not match {LOG_EVENT_SCHEMA} at {field}: {exc.message}",
            ERR_VALIDATION,
            kind="schema_violation",
        ) from exc

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from ..run_id import make_run_id
from .env import getenv

LogFormat = Literal["text", "json"]

DEFAULT_CATALOG = "default"


@dataclass(frozen=True)
class LaunchContext:
    catalog_name: str
    catalog_root: Path
    project_dir: Path
    run_id: str
    log_json: bool
    quiet: bool

    @classmethod
    def from_args(
        cls,
        catalog_name: str | None,
        catalog_root: Path,
        run_id: str | None = None,
        log_format: LogFormat = "text",
        quiet: bool = False,
    ) -> "LaunchContext":
        name = catalog_name or DEFAULT_CATALOG
        root = Path(catalog_root).resolve()
        resolved_run_id = run_id or getenv("RUN_ID") or make_run_id(root)
        return cls(
            catalog_name=name,
            catalog_root=root,
            project_dir=root / "examples" / name,
            run_id=resolved_run_id,
            log_json=log_format == "json",
            quiet=quiet,
        )

    @property
    def catalog_dir_env(self) -> str:
        """`CATALOG_DIR` value handed to children; keeps a trailing separator."""
        return os.path.join(str(self.catalog_root), "")

    def child_env(self) -> dict[str, str]:
        return {
            "PROJECT_DIR": str(self.project_dir),
            "CATALOG_DIR": self.catalog_dir_env,
        }

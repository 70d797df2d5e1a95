#!/usr/bin/env python3
# owner: platform
# purpose: hydrate an example catalog and start its local dev server.
# stability: public
# called-by: developers, `python scripts/start_catalog_locally.py [catalog]`
# Inputs: optional catalog name (default: `default`), selecting examples/<catalog>
# Outputs: streams `npm run scripts:hydrate-content` then `npm run dev:local`
from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
PACKAGE_SRC = ROOT / "packages" / "catalogctl" / "src"
if str(PACKAGE_SRC) not in sys.path:
    sys.path.insert(0, str(PACKAGE_SRC))


def main() -> int:
    from catalogctl.launcher import run

    return run(sys.argv[1:], catalog_root=ROOT)


if __name__ == "__main__":
    raise SystemExit(main())

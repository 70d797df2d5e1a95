from __future__ import annotations

import socket
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings
from hypothesis.database import DirectoryBasedExampleDatabase

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

_ROOT = Path(__file__).resolve().parents[3]
_HYPOTHESIS_DB = _ROOT / "artifacts/catalogctl/.hypothesis/examples"
_HYPOTHESIS_DB.parent.mkdir(parents=True, exist_ok=True)
settings.register_profile(
    "catalogctl",
    database=DirectoryBasedExampleDatabase(_HYPOTHESIS_DB),
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("catalogctl")

_LAUNCHER_ENV = (
    "CATALOG_ROOT",
    "CATALOGCTL_NPM",
    "CATALOGCTL_HYDRATE_SCRIPT",
    "CATALOGCTL_DEV_SCRIPT",
    "CATALOGCTL_LOG_FORMAT",
    "CATALOGCTL_QUIET",
    "CATALOGCTL_INTERRUPT_GRACE",
    "NODE_ENV",
    "PROJECT_DIR",
    "CATALOG_DIR",
)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def clean_launcher_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _LAUNCHER_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("RUN_ID", "pytest-run")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)

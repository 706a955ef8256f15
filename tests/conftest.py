from __future__ import annotations

from typing import Any, Callable

import pytest


BASE_RECORD: dict[str, Any] = {
    "v": 0,
    "level": 30,
    "name": "app",
    "hostname": "host",
    "pid": 123,
    "time": "2024-01-02T03:04:05",
    "msg": "hello",
}


@pytest.fixture
def make_record() -> Callable[..., dict[str, Any]]:
    """Build a valid Bunyan record, overriding or dropping fields per call."""

    def _make(*, drop: tuple[str, ...] = (), **overrides: Any) -> dict[str, Any]:
        record = dict(BASE_RECORD)
        record.update(overrides)
        for key in drop:
            record.pop(key, None)
        return record

    return _make


@pytest.fixture(autouse=True)
def _isolate_color_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep colour and output preferences of the host shell out of the tests."""

    for name in ("BUNYAN_VIEW_COLOR", "BUNYAN_VIEW_OUTPUT", "BUNYAN_VIEW_JSON_INDENT", "BUNYAN_VIEW_USE_DOTENV", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)

"""Shared pytest fixtures and helpers for request manager tests."""

import json
from typing import Any, Callable, Optional

import pytest

from request_manager.config import get_settings
from request_manager.request.content import RequestData
from request_manager.request.manager import RequestManager
from request_manager.request.rule import RequestRule, ValidationMap


def json_request(payload: Any, method: str = "POST", **kwargs: Any) -> RequestData:
    """Request snapshot carrying a JSON body."""
    return RequestData(
        method=method,
        content_type="application/json",
        body=json.dumps(payload).encode(),
        **kwargs,
    )


class MapRule(RequestRule):
    """Rule built from a literal validation map, recording lifecycle calls."""

    def __init__(self, validation_map: ValidationMap, hooks: Optional[dict[str, Callable]] = None):
        super().__init__()
        self.validation_map = validation_map
        self.calls: list[str] = []
        for field, hook in (hooks or {}).items():
            self.register_field_hook(field, hook)

    def get_validation_map(self) -> ValidationMap:
        return self.validation_map

    def on_validation_start(self, manager: RequestManager) -> None:
        self.calls.append("start")

    def on_validation_end(self, manager: RequestManager) -> None:
        self.calls.append("end")


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep environment settings from leaking into tests."""
    for name in ("DEBUG", "LOG_LEVEL", "JSON_CONTENT_TYPES", "READ_ONLY_METHODS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_manager() -> Callable[..., RequestManager]:
    """Factory for a debug-mode manager over a JSON payload."""

    def _make(payload: Any, is_debug: bool = True, **kwargs: Any) -> RequestManager:
        return RequestManager(json_request(payload, **kwargs), is_debug=is_debug)

    return _make

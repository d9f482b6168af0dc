"""Tests for RequestRule and FieldRule."""

import pytest

from request_manager.constraints import NotBlank
from request_manager.request.rule import FieldRule
from tests.conftest import MapRule


class TestFieldRule:
    def test_wraps_single_constraint(self) -> None:
        rule = FieldRule(constraints=NotBlank())
        assert len(rule.constraints) == 1

    def test_coerce(self) -> None:
        assert FieldRule.coerce(None).constraints == []
        assert FieldRule.coerce({"processor": print}).processor is print
        existing = FieldRule()
        assert FieldRule.coerce(existing) is existing

    def test_non_callable_processor_is_stored(self) -> None:
        assert FieldRule(processor=42).processor == 42


class TestFieldHooks:
    def test_registered_case_folded(self) -> None:
        hook = lambda manager: None  # noqa: E731
        rule = MapRule({}, hooks={"UserName": hook})

        assert rule.get_field_hook("username") is hook
        assert rule.get_field_hook("USERNAME") is hook
        assert rule.get_field_hook("email") is None
        assert list(rule.field_hooks) == ["username"]

    def test_hook_must_be_callable(self) -> None:
        with pytest.raises(TypeError):
            MapRule({}).register_field_hook("name", "nope")

"""Request rules — the declarative schema a controller validates a request against.

A rule returns a validation map (field name → FieldRule) and may hook into
the validation lifecycle:

    class CreateUserRule(RequestRule):
        def __init__(self):
            super().__init__()
            self.register_field_hook("email", self.email_validation)

        def get_validation_map(self):
            return {
                "name": FieldRule(constraints=[NotBlank(), Length(max=64)]),
                "email": FieldRule(constraints=[NotBlank(), Email()]),
            }

        def email_validation(self, manager):
            manager.manipulate("email", manager.request_content["email"].lower())
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from pydantic import BaseModel, Field, field_validator

from request_manager.constraints.base import Constraint

if TYPE_CHECKING:
    from request_manager.request.manager import RequestManager

FieldHook = Callable[["RequestManager"], Any]


class FieldRule(BaseModel):
    """Constraints and an optional post-validation processor for one field.

    The processor is stored as given. A non-callable value is reported when
    the manager tries to run it, not here.
    """

    constraints: list[Constraint] = Field(default_factory=list)
    processor: Any = None

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("constraints", mode="before")
    @classmethod
    def _wrap_single(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, Constraint):
            return [value]
        return value

    @classmethod
    def coerce(cls, entry: Union["FieldRule", dict, None]) -> "FieldRule":
        """Accept a FieldRule, a plain dict with the same keys, or None."""
        if isinstance(entry, FieldRule):
            return entry
        if entry is None:
            return cls()
        return cls.model_validate(entry)


ValidationMap = dict[str, Union[FieldRule, dict, None]]


class RequestRule(ABC):
    """Abstract base for request rules.

    Per-field hooks are registered explicitly, keyed by the case-folded
    field name, and run after all constraints pass. A rule instance is
    meant for a single request.
    """

    def __init__(self):
        self._field_hooks: dict[str, FieldHook] = {}

    @abstractmethod
    def get_validation_map(self) -> ValidationMap:
        """Return the field → FieldRule mapping, in validation order."""
        ...

    def on_validation_start(self, manager: "RequestManager") -> None:
        """Called before any check runs."""

    def on_validation_end(self, manager: "RequestManager") -> None:
        """Called once all checks pass, before field hooks and processors."""

    def register_field_hook(self, field: str, hook: FieldHook) -> "RequestRule":
        if not callable(hook):
            raise TypeError(f"Hook for field '{field}' must be callable")
        self._field_hooks[field.casefold()] = hook
        return self

    def get_field_hook(self, field: str) -> Optional[FieldHook]:
        return self._field_hooks.get(field.casefold())

    @property
    def field_hooks(self) -> dict[str, FieldHook]:
        return dict(self._field_hooks)

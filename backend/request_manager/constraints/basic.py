"""Scalar constraints — blank checks, lengths, ranges, choices, patterns and types."""

import re
from collections.abc import Mapping, Sized
from typing import Any, Callable, Optional, Union

from email_validator import EmailNotValidError, validate_email

from request_manager.constraints.base import Constraint, Violation


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class NotBlank(Constraint):
    """Rejects None, empty strings and empty collections."""

    message = "This value should not be blank."

    def __init__(self, message: Optional[str] = None, allow_none: bool = False, normalize: bool = False):
        self.message = message or self.message
        self.allow_none = allow_none
        self.normalize = normalize

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        if value is None:
            if self.allow_none:
                return []
            return [self._violation(self.message, value, path, code="is_blank")]

        if isinstance(value, str) and self.normalize:
            value = value.strip()

        if value is False or (isinstance(value, (str, list, tuple, dict)) and len(value) == 0):
            return [self._violation(self.message, value, path, code="is_blank")]
        return []


class NotNull(Constraint):
    """Rejects None only."""

    message = "This value should not be null."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        if value is None:
            return [self._violation(self.message, value, path, code="is_null")]
        return []


class Length(Constraint):
    """Bounds the length of a string or a sized collection."""

    min_message = "This value is too short. It should have {limit} characters or more."
    max_message = "This value is too long. It should have {limit} characters or less."
    exact_message = "This value should have exactly {limit} characters."
    type_message = "This value should be of type string."

    def __init__(
        self,
        min: Optional[int] = None,
        max: Optional[int] = None,
        exact: Optional[int] = None,
        min_message: Optional[str] = None,
        max_message: Optional[str] = None,
        exact_message: Optional[str] = None,
    ):
        if min is None and max is None and exact is None:
            raise ValueError("Length requires at least one of 'min', 'max' or 'exact'")
        if exact is not None:
            min = max = exact
        self.min = min
        self.max = max
        self.exact = exact
        self.min_message = min_message or self.min_message
        self.max_message = max_message or self.max_message
        self.exact_message = exact_message or self.exact_message

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        if value is None:
            return []
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, Sized):
            return [self._violation(self.type_message, value, path, code="invalid_type")]

        length = len(value)
        if self.exact is not None and length != self.exact:
            return [self._violation(self.exact_message, value, path, code="not_equal_length", limit=self.exact)]
        if self.min is not None and length < self.min:
            return [self._violation(self.min_message, value, path, code="too_short", limit=self.min)]
        if self.max is not None and length > self.max:
            return [self._violation(self.max_message, value, path, code="too_long", limit=self.max)]
        return []

    def __repr__(self) -> str:
        return f"Length(min={self.min}, max={self.max})"


class Range(Constraint):
    """Bounds a numeric value."""

    min_message = "This value should be {limit} or more."
    max_message = "This value should be {limit} or less."
    invalid_message = "This value should be a valid number."

    def __init__(
        self,
        min: Optional[float] = None,
        max: Optional[float] = None,
        min_message: Optional[str] = None,
        max_message: Optional[str] = None,
    ):
        if min is None and max is None:
            raise ValueError("Range requires at least one of 'min' or 'max'")
        self.min = min
        self.max = max
        self.min_message = min_message or self.min_message
        self.max_message = max_message or self.max_message

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        if value is None:
            return []
        if not _is_number(value):
            return [self._violation(self.invalid_message, value, path, code="invalid_number")]
        if self.min is not None and value < self.min:
            return [self._violation(self.min_message, value, path, code="too_low", limit=self.min)]
        if self.max is not None and value > self.max:
            return [self._violation(self.max_message, value, path, code="too_high", limit=self.max)]
        return []


class Choice(Constraint):
    """Restricts a value (or each item of a list when ``multiple``) to a fixed set."""

    message = "The value you selected is not a valid choice."
    multiple_message = "One or more of the given values is invalid."

    def __init__(self, choices: list[Any], multiple: bool = False, message: Optional[str] = None):
        self.choices = list(choices)
        self.multiple = multiple
        if message:
            self.message = self.multiple_message = message

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        if value is None:
            return []
        if self.multiple:
            if not isinstance(value, (list, tuple)):
                return [self._violation("This value should be of type list.", value, path, code="invalid_type")]
            if any(item not in self.choices for item in value):
                return [self._violation(self.multiple_message, value, path, code="no_such_choice")]
            return []
        if value not in self.choices:
            return [self._violation(self.message, value, path, code="no_such_choice")]
        return []

    def __repr__(self) -> str:
        return f"Choice({self.choices!r})"


class Regex(Constraint):
    """Matches a string against a regular expression (searched, not anchored)."""

    message = "This value is not valid."

    def __init__(self, pattern: Union[str, re.Pattern], match: bool = True, message: Optional[str] = None):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.match = match
        self.message = message or self.message

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        if value is None or value == "":
            return []
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            return [self._violation("This value should be of type string.", value, path, code="invalid_type")]
        if bool(self.pattern.search(str(value))) != self.match:
            return [self._violation(self.message, value, path, code="regex_failed")]
        return []

    def __repr__(self) -> str:
        return f"Regex({self.pattern.pattern!r})"


class Email(Constraint):
    """Checks e-mail address syntax with email-validator (no DNS lookups)."""

    message = "This value is not a valid email address."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        if value is None or value == "":
            return []
        if not isinstance(value, str):
            return [self._violation("This value should be of type string.", value, path, code="invalid_type")]
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return [self._violation(self.message, value, path, code="invalid_email")]
        return []


# Type names accepted by Type(), mapped to their checks
TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "string": lambda v: isinstance(v, str),
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "float": lambda v: isinstance(v, float),
    "numeric": _is_number,
    "bool": lambda v: isinstance(v, bool),
    "list": lambda v: isinstance(v, list),
    "dict": lambda v: isinstance(v, Mapping),
    "scalar": lambda v: isinstance(v, (str, int, float, bool)),
}


class Type(Constraint):
    """Checks the runtime type of a value, by name or by class."""

    message = "This value should be of type {type}."

    def __init__(self, type_: Union[str, type, tuple], message: Optional[str] = None):
        if isinstance(type_, str) and type_ not in TYPE_CHECKS:
            raise ValueError(f"Unknown type '{type_}'. Use one of: {', '.join(sorted(TYPE_CHECKS))}")
        self.type = type_
        self.message = message or self.message

    @property
    def type_name(self) -> str:
        if isinstance(self.type, str):
            return self.type
        if isinstance(self.type, tuple):
            return "|".join(t.__name__ for t in self.type)
        return self.type.__name__

    def _matches(self, value: Any) -> bool:
        if isinstance(self.type, str):
            return TYPE_CHECKS[self.type](value)
        types = self.type if isinstance(self.type, tuple) else (self.type,)
        if isinstance(value, bool) and bool not in types:
            return False
        return isinstance(value, types)

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        if value is None or self._matches(value):
            return []
        return [self._violation(self.message, value, path, code="invalid_type", type=self.type_name)]

    def __repr__(self) -> str:
        return f"Type({self.type_name!r})"


class Callback(Constraint):
    """Wraps an arbitrary predicate; a falsy result is a violation."""

    message = "This value is not valid."

    def __init__(self, func: Callable[[Any], bool], message: Optional[str] = None):
        self.func = func
        self.message = message or self.message

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        if self.func(value):
            return []
        return [self._violation(self.message, value, path, code="callback_failed")]

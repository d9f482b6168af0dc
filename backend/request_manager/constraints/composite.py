"""Composite constraints — recurse into mappings and sequences.

Nested violations carry a dotted property path relative to the value the
composite was given, e.g. ``address.street`` or ``tags.2``.
"""

from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union

from request_manager.constraints.base import Constraint, Violation, join_path

ConstraintList = Union[Constraint, Sequence[Constraint]]


def as_list(constraints: Optional[ConstraintList]) -> list[Constraint]:
    """Normalize one constraint, a sequence of them, or None into a list."""
    if constraints is None:
        return []
    if isinstance(constraints, Constraint):
        return [constraints]
    return list(constraints)


def run_all(value: Any, constraints: Sequence[Constraint], path: str = "") -> list[Violation]:
    violations: list[Violation] = []
    for constraint in constraints:
        violations.extend(constraint.validate(value, path))
    return violations


class RequiredField(Constraint):
    """Marks a Collection field as mandatory (the default)."""

    def __init__(self, constraints: Optional[ConstraintList] = None):
        self.constraints = as_list(constraints)

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        return run_all(value, self.constraints, path)


class OptionalField(RequiredField):
    """Marks a Collection field as allowed to be absent."""


class Collection(Constraint):
    """Validates each declared key of a mapping with its own constraints."""

    missing_message = "This field is missing."
    extra_message = "This field was not expected."
    type_message = "This value should be of type dict."

    def __init__(
        self,
        fields: Mapping[str, Optional[ConstraintList]],
        allow_extra_fields: bool = False,
        allow_missing_fields: bool = False,
        missing_message: Optional[str] = None,
        extra_message: Optional[str] = None,
    ):
        self.fields: dict[str, RequiredField] = {}
        for key, constraints in fields.items():
            if isinstance(constraints, RequiredField):
                self.fields[key] = constraints
            else:
                self.fields[key] = RequiredField(constraints)
        self.allow_extra_fields = allow_extra_fields
        self.allow_missing_fields = allow_missing_fields
        self.missing_message = missing_message or self.missing_message
        self.extra_message = extra_message or self.extra_message

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        if value is None:
            return []
        if not isinstance(value, Mapping):
            return [self._violation(self.type_message, value, path, code="invalid_type")]

        violations: list[Violation] = []

        for key, field in self.fields.items():
            field_path = join_path(path, key)
            if key in value:
                violations.extend(field.validate(value[key], field_path))
            elif not isinstance(field, OptionalField) and not self.allow_missing_fields:
                violations.append(self._violation(self.missing_message, None, field_path, code="missing_field"))

        if not self.allow_extra_fields:
            for key in value:
                if key not in self.fields:
                    violations.append(
                        self._violation(self.extra_message, value[key], join_path(path, key), code="no_such_field")
                    )

        return violations

    def __repr__(self) -> str:
        return f"Collection({list(self.fields)!r})"


class All(Constraint):
    """Applies constraints to every element of a list or every value of a mapping."""

    type_message = "This value should be of type list."

    def __init__(self, constraints: ConstraintList):
        self.constraints = as_list(constraints)

    def validate(self, value: Any, path: str = "") -> list[Violation]:
        if value is None:
            return []
        if isinstance(value, Mapping):
            items = value.items()
        elif isinstance(value, (list, tuple)):
            items = enumerate(value)
        else:
            return [self._violation(self.type_message, value, path, code="invalid_type")]

        violations: list[Violation] = []
        for key, item in items:
            violations.extend(run_all(item, self.constraints, join_path(path, key)))
        return violations

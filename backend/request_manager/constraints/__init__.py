"""Field constraints — the predicates a validation map attaches to each field.

Usage:
    from request_manager.constraints import NotBlank, Length, Collection

    violations = constraint_validator.validate(value, [NotBlank(), Length(max=10)])
"""

from request_manager.constraints.base import Constraint, Violation
from request_manager.constraints.basic import (
    Callback,
    Choice,
    Email,
    Length,
    NotBlank,
    NotNull,
    Range,
    Regex,
    Type,
)
from request_manager.constraints.composite import All, Collection, OptionalField, RequiredField
from request_manager.constraints.validator import ConstraintValidator, constraint_validator

__all__ = [
    "Constraint",
    "Violation",
    "ConstraintValidator",
    "constraint_validator",
    "NotBlank",
    "NotNull",
    "Length",
    "Range",
    "Choice",
    "Regex",
    "Email",
    "Type",
    "Callback",
    "Collection",
    "RequiredField",
    "OptionalField",
    "All",
]

"""Constraint validator — runs constraints against a value and collects violations.

Usage:
    violations = constraint_validator.validate(payload["name"], [NotBlank(), Length(max=64)])
    if violations:
        first = violations[0]
"""

from typing import Any, Optional

import structlog

from request_manager.constraints.base import Violation
from request_manager.constraints.composite import ConstraintList, as_list, run_all

logger = structlog.get_logger()


class ConstraintValidator:
    """Entry point for checking a value against one or more constraints."""

    def validate(self, value: Any, constraints: Optional[ConstraintList]) -> list[Violation]:
        """Run every constraint, in declaration order.

        Args:
            value: The value to check
            constraints: A single constraint, a sequence of them, or None

        Returns:
            All violations, in the order the constraints produced them
        """
        constraint_list = as_list(constraints)
        violations = run_all(value, constraint_list)

        if violations:
            logger.debug(
                "constraints_violated",
                constraints=[repr(c) for c in constraint_list],
                violation_count=len(violations),
            )

        return violations


# Module-level singleton
constraint_validator = ConstraintValidator()

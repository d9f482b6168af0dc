"""Base constraint — abstract class every field constraint implements.

A constraint inspects one value and reports zero or more violations.
Composite constraints recurse into nested values and extend the property
path so each violation points at the exact element that failed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Violation:
    """A single constraint failure."""

    message: str
    property_path: str = ""
    code: Optional[str] = None
    invalid_value: Any = None


def join_path(path: str, key: Any) -> str:
    """Append one segment to a dotted property path."""
    return f"{path}.{key}" if path else str(key)


class Constraint(ABC):
    """Abstract base for all constraints.

    Contract:
        - validate() never raises for bad input, it reports violations
        - validate() returns an empty list when the value is acceptable
        - property paths are dotted and relative to the validated value
    """

    @property
    def name(self) -> str:
        """Human-readable name for logging."""
        return type(self).__name__

    @abstractmethod
    def validate(self, value: Any, path: str = "") -> list[Violation]:
        """Check a value.

        Args:
            value: The value to check
            path: Property path of the value inside the enclosing payload

        Returns:
            List of Violation findings (empty if the value is acceptable)
        """
        ...

    # ── Helper Methods ──

    def _violation(
        self,
        message: str,
        value: Any,
        path: str = "",
        code: Optional[str] = None,
        **params: Any,
    ) -> Violation:
        """Convenience method to create a Violation with a formatted message."""
        return Violation(
            message=message.format(**params) if params else message,
            property_path=path,
            code=code,
            invalid_value=value,
        )

    def __repr__(self) -> str:
        return f"{self.name}()"

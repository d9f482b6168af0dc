"""Problem documents — the structured error a failed validation produces.

A problem carries an HTTP status, an optional machine-readable kind, a
human-readable title and an open-ended extra-data payload. It is rendered
as ``application/problem+json`` by the API exception handlers.
"""

from enum import Enum
from http import HTTPStatus
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class ProblemType(str, Enum):
    """Machine-readable kinds of problems raised by the request manager."""

    INVALID_BODY_FORMAT = "invalid_body_format"
    UNDEFINED_PARAMETERS = "undefined_parameters"
    MISSING_REQUIRED_PARAMETER = "missing_required_parameter"
    VALIDATION_ERROR = "validation_error"
    CALLBACK_NOT_CALLABLE = "callback_not_callable"


class SmartProblem(BaseModel):
    """A single problem report."""

    status: int = Field(description="HTTP status code")
    type: Optional[str] = Field(default=None, description="Problem kind, 'about:blank' when absent")
    title: str = Field(default="", description="Human-readable summary")
    extra_data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value

    @model_validator(mode="after")
    def _default_title(self) -> "SmartProblem":
        if not self.title:
            try:
                self.title = HTTPStatus(self.status).phrase
            except ValueError:
                self.title = "Unknown error"
        return self

    def add_extra_data(self, key: str, value: Any) -> "SmartProblem":
        """Attach an extra member to the rendered problem document."""
        self.extra_data[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        document = dict(self.extra_data)
        document["status"] = self.status
        document["type"] = self.type or "about:blank"
        document["title"] = self.title
        return document

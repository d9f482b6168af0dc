"""Exceptions raised by the request manager."""

from typing import Any

from request_manager.models.problem import SmartProblem


class RequestManagerError(Exception):
    """Base class for every error raised by this package."""

    kind = "request_manager_error"


class SmartProblemException(RequestManagerError):
    """Carries a SmartProblem up to the HTTP exception handlers."""

    def __init__(self, problem: SmartProblem):
        super().__init__(problem.title)
        self.problem = problem

    @property
    def kind(self) -> str:
        return self.problem.type or "about:blank"

    @property
    def status_code(self) -> int:
        return self.problem.status


class InvalidProcessorError(RequestManagerError, TypeError):
    """A validation-map entry declares a processor that cannot be called."""

    kind = "invalid_argument"

    def __init__(self, processor: Any):
        super().__init__(
            f'The "processor" option must be a valid callable ("{type(processor).__name__}" given).'
        )
        self.processor = processor


class BagKeyNotFoundError(RequestManagerError, LookupError):
    """The bag holds no value for the requested key."""

    kind = "bag_key_not_found"

    def __init__(self, key: str):
        super().__init__(f'There is no value associated with the key "{key}".')
        self.key = key

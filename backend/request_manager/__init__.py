"""Request Manager — request body validation for web controllers.

Usage:
    from request_manager import RequestManager, RequestRule, FieldRule
    from request_manager.constraints import NotBlank

    content = manager.validate(rule)
"""

from request_manager.exceptions import (
    BagKeyNotFoundError,
    InvalidProcessorError,
    RequestManagerError,
    SmartProblemException,
)
from request_manager.models.problem import ProblemType, SmartProblem
from request_manager.request.content import RequestData
from request_manager.request.manager import RequestManager
from request_manager.request.rule import FieldRule, RequestRule

__all__ = [
    "RequestManager",
    "RequestRule",
    "FieldRule",
    "RequestData",
    "SmartProblem",
    "ProblemType",
    "SmartProblemException",
    "RequestManagerError",
    "InvalidProcessorError",
    "BagKeyNotFoundError",
]

"""FastAPI integration — dependencies and exception handlers."""

from request_manager.api.dependencies import get_request_data, get_request_manager
from request_manager.api.handlers import register_exception_handlers, smart_problem_exception_handler

__all__ = [
    "get_request_data",
    "get_request_manager",
    "register_exception_handlers",
    "smart_problem_exception_handler",
]

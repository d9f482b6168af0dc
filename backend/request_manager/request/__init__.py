from request_manager.request.content import RequestData, expand_brackets, parse_request_content
from request_manager.request.manager import RequestManager
from request_manager.request.rule import FieldRule, RequestRule, ValidationMap

__all__ = [
    "RequestData",
    "RequestManager",
    "RequestRule",
    "FieldRule",
    "ValidationMap",
    "expand_brackets",
    "parse_request_content",
]

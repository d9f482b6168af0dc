"""Data models shared by the request manager and its HTTP integration."""

from request_manager.models.problem import ProblemType, SmartProblem

__all__ = ["ProblemType", "SmartProblem"]

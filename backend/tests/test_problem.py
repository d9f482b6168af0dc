"""Tests for SmartProblem and the exception types."""

from request_manager.exceptions import RequestManagerError, SmartProblemException
from request_manager.models.problem import ProblemType, SmartProblem


class TestSmartProblem:
    def test_to_dict_merges_extra_data(self) -> None:
        problem = SmartProblem(status=400, type=ProblemType.VALIDATION_ERROR, title="There was a validation error.")
        problem.add_extra_data("errors", {"name": "bad"})

        assert problem.to_dict() == {
            "status": 400,
            "type": "validation_error",
            "title": "There was a validation error.",
            "errors": {"name": "bad"},
        }

    def test_defaults(self) -> None:
        problem = SmartProblem(status=418)
        assert problem.type is None
        assert problem.title == "I'm a Teapot"
        assert problem.to_dict()["type"] == "about:blank"


class TestSmartProblemException:
    def test_exposes_problem(self) -> None:
        exc = SmartProblemException(SmartProblem(status=400, type="invalid_body_format", title="Invalid JSON format sent."))
        assert isinstance(exc, RequestManagerError)
        assert exc.status_code == 400
        assert exc.kind == "invalid_body_format"
        assert str(exc) == "Invalid JSON format sent."

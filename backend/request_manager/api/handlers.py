"""Exception handlers — turn request manager errors into HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from request_manager.exceptions import SmartProblemException

logger = structlog.get_logger()

PROBLEM_MEDIA_TYPE = "application/problem+json"


async def smart_problem_exception_handler(request: Request, exc: SmartProblemException):
    """Render the problem document with its own status code."""
    logger.info(
        "smart_problem",
        path=request.url.path,
        method=request.method,
        status=exc.problem.status,
        type=exc.kind,
    )
    return JSONResponse(
        status_code=exc.problem.status,
        content=exc.problem.to_dict(),
        media_type=PROBLEM_MEDIA_TYPE,
    )


def register_exception_handlers(app: FastAPI) -> FastAPI:
    app.add_exception_handler(SmartProblemException, smart_problem_exception_handler)
    return app

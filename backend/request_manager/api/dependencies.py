"""FastAPI dependencies — one RequestManager per incoming request."""

from fastapi import Request

from request_manager.config import get_settings
from request_manager.request.content import RequestData
from request_manager.request.manager import RequestManager


async def get_request_data(request: Request) -> RequestData:
    return await RequestData.from_request(request)


async def get_request_manager(request: Request) -> RequestManager:
    """Build a manager for the current request.

    Debug mode comes from the settings stored on the app by create_app(),
    falling back to environment settings. Use it in a route signature:

        @router.post("/users")
        async def create_user(manager: RequestManager = Depends(get_request_manager)):
            content = manager.validate(CreateUserRule())
    """
    settings = getattr(request.app.state, "settings", None) or get_settings()
    data = await get_request_data(request)
    return RequestManager(data, settings=settings)

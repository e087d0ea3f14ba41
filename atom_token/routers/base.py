from typing import Any, Callable, Coroutine

from fastapi.routing import APIRoute
from starlette.requests import Request
from starlette.responses import Response

from atom_token.utils import universal_exception_handler


class ErrorHandlingBaseRoute(APIRoute):
    """
    Base class for all API routes that handles all types of exceptions
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def custom_route_handler(request: Request) -> Response:
            try:
                response = await original_route_handler(request)
            except Exception as exc:
                response = await universal_exception_handler(request, exc)

            return response

        return custom_route_handler

"""Route class enforcing bearer authentication before the body is read."""

from __future__ import annotations

from typing import Any, Callable, Coroutine

from fastapi import Request, Response
from fastapi.routing import APIRoute

from savebite.core.dependencies import authenticate_request
from savebite.security import bearer_scheme


class AuthenticatedRoute(APIRoute):
    """APIRoute that rejects unauthenticated requests up front.

    FastAPI parses the JSON body before resolving dependencies, so a
    dependency alone would answer 400 to an anonymous request with a broken
    body. This wrapper answers 401 first.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def authenticated_route_handler(request: Request) -> Response:
            credentials = await bearer_scheme(request)
            authenticate_request(request, credentials, request.app.state.token_service)
            return await original_route_handler(request)

        return authenticated_route_handler

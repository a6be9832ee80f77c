"""
Theme route handlers
"""

from starlette.requests import Request
from starlette.responses import JSONResponse

from torsapi.api.routes.base import BaseRouteHandler, handle_errors, message_response


class ThemeRoutes(BaseRouteHandler):
    """GET/POST /theme"""

    @handle_errors
    async def handle_get(self, request: Request) -> JSONResponse:
        theme = await self.store.get_theme()
        return JSONResponse(content={"theme": theme})

    @handle_errors
    async def handle_set(self, request: Request) -> JSONResponse:
        body = await self._read_json_object(request)
        new_theme = body.get("newTheme")

        await self.store.set_theme(new_theme)
        return message_response(f"Theme changed to {new_theme}.")

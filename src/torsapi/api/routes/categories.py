"""
Category route handlers
"""

from starlette.requests import Request
from starlette.responses import JSONResponse

from torsapi.api.routes.base import BaseRouteHandler, handle_errors, message_response
from torsapi.core.errors import ValidationError

CATEGORY_NAME_REQUIRED = "Category name is required."


class CategoryRoutes(BaseRouteHandler):
    """
    Category route handlers

    GET/POST /categories, GET/PUT/DELETE /categories/{category_id}
    """

    @handle_errors
    async def handle_list(self, request: Request) -> JSONResponse:
        categories = await self.store.list_categories()
        return JSONResponse(content=categories)

    @handle_errors
    async def handle_get(self, request: Request) -> JSONResponse:
        name = await self.store.get_category(request.path_params["category_id"])
        return JSONResponse(content={"name": name})

    @handle_errors
    async def handle_create(self, request: Request) -> JSONResponse:
        body = await self._read_json_object(request)
        if self._missing_fields(body, "name"):
            raise ValidationError(CATEGORY_NAME_REQUIRED)

        category_id = await self.store.create_category(body["name"])
        return message_response(
            "Category created successfully!", status_code=201, categoryId=category_id
        )

    @handle_errors
    async def handle_update(self, request: Request) -> JSONResponse:
        """Rename a category (the name is passed to the Store unvalidated)"""
        category_id = request.path_params["category_id"]
        body = await self._read_json_object(request)

        await self.store.update_category(category_id, body.get("name"))
        return message_response("Category updated successfully!")

    @handle_errors
    async def handle_delete(self, request: Request) -> JSONResponse:
        """Delete a category; tasks referencing it lose their category"""
        await self.store.delete_category(request.path_params["category_id"])
        return message_response("Category deleted successfully!")

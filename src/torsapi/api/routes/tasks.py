"""
Task route handlers
"""

from starlette.requests import Request
from starlette.responses import JSONResponse

from torsapi.api.routes.base import BaseRouteHandler, handle_errors, message_response
from torsapi.core.errors import ValidationError
from torsapi.core.utils.helpers import coerce_id
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)

MISSING_TASK_FIELDS = "Missing required fields: name, description, eta."


class TaskRoutes(BaseRouteHandler):
    """
    Task route handlers

    GET/POST /tasks, PUT/DELETE /tasks/{task_id},
    POST /tasks/{task_id}/assign-category
    """

    @handle_errors
    async def handle_list(self, request: Request) -> JSONResponse:
        """List tasks with their category names"""
        tasks = await self.store.list_tasks()
        return JSONResponse(content=tasks)

    @handle_errors
    async def handle_create(self, request: Request) -> JSONResponse:
        """
        Create a task

        Presence of name, description and eta is checked here; the Store
        rejects empty values.
        """
        body = await self._read_json_object(request)
        if self._missing_fields(body, "name", "description", "eta"):
            raise ValidationError(MISSING_TASK_FIELDS)

        task_id = await self.store.create_task(body["name"], body["description"], body["eta"])
        return message_response("Task created successfully!", status_code=201, taskId=task_id)

    @handle_errors
    async def handle_update(self, request: Request) -> JSONResponse:
        """Partially update a task; absent or null fields keep their value"""
        task_id = request.path_params["task_id"]
        body = await self._read_json_object(request)

        await self.store.update_task(
            task_id,
            name=body.get("name"),
            description=body.get("description"),
            eta=body.get("eta"),
        )
        return message_response("Task updated successfully!")

    @handle_errors
    async def handle_delete(self, request: Request) -> JSONResponse:
        """Delete a task"""
        task_id = request.path_params["task_id"]
        await self.store.delete_task(task_id)
        return message_response("Task deleted successfully!")

    @handle_errors
    async def handle_assign_category(self, request: Request) -> JSONResponse:
        """
        Assign a category to a task

        A categoryId that is absent or not an integer is reported as an
        unknown category.
        """
        task_id = request.path_params["task_id"]
        body = await self._read_json_object(request)

        await self.store.assign_category(task_id, coerce_id(body.get("categoryId")))
        return message_response("Category assigned successfully!")

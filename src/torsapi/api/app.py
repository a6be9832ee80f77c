"""
Starlette application for the torsapi HTTP API
"""

import contextlib
from typing import List, Optional, Sequence

from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from torsapi.api.middleware.api_key import APIKeyMiddleware
from torsapi.api.routes import TaskRoutes, CategoryRoutes, ThemeRoutes
from torsapi.core.store import Store
from torsapi.core.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
]


async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Answer unmatched routes and wrong methods with a JSON message"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


class TorsApplication:
    """
    Builder for the torsapi Starlette application

    As a library: all configuration via constructor parameters. Environment
    variables are read by the application layer (api/main.py) and passed in.
    """

    def __init__(
        self,
        store: Store,
        api_key: Optional[str] = None,
        cors_origins: Optional[Sequence[str]] = None,
        cors_allow_all: bool = False,
        initialize_on_startup: bool = True,
        close_store_on_shutdown: bool = False,
    ):
        """
        Initialize the application builder

        Args:
            store: Store every route handler uses
            api_key: Shared secret expected in the api-key header. If None,
                     every request is answered with 500 (server configuration error).
            cors_origins: Allowed CORS origins (default: local development origins)
            cors_allow_all: Allow any origin
            initialize_on_startup: Run store.initialize() in the lifespan startup
            close_store_on_shutdown: Close the store's session on shutdown
        """
        self.store = store
        self.api_key = api_key
        self.cors_origins = list(cors_origins) if cors_origins is not None else list(DEFAULT_CORS_ORIGINS)
        self.cors_allow_all = cors_allow_all
        self.initialize_on_startup = initialize_on_startup
        self.close_store_on_shutdown = close_store_on_shutdown

        self.task_routes = TaskRoutes(store)
        self.category_routes = CategoryRoutes(store)
        self.theme_routes = ThemeRoutes(store)

        if not api_key:
            logger.warning("No API key configured; every request will fail with 500")

        logger.info(
            f"Initialized TorsApplication "
            f"(API key configured: {bool(api_key)}, "
            f"CORS allow all: {cors_allow_all}, "
            f"Initialize on startup: {initialize_on_startup})"
        )

    def routes(self) -> List[Route]:
        """Returns the Starlette routes for the task, category and theme endpoints"""
        app_routes = [
            Route("/tasks", self.task_routes.handle_list, methods=["GET"], name="list_tasks"),
            Route("/tasks", self.task_routes.handle_create, methods=["POST"], name="create_task"),
            Route(
                "/tasks/{task_id:int}",
                self.task_routes.handle_update,
                methods=["PUT"],
                name="update_task",
            ),
            Route(
                "/tasks/{task_id:int}",
                self.task_routes.handle_delete,
                methods=["DELETE"],
                name="delete_task",
            ),
            Route(
                "/tasks/{task_id:int}/assign-category",
                self.task_routes.handle_assign_category,
                methods=["POST"],
                name="assign_category",
            ),
            Route("/categories", self.category_routes.handle_list, methods=["GET"], name="list_categories"),
            Route("/categories", self.category_routes.handle_create, methods=["POST"], name="create_category"),
            Route(
                "/categories/{category_id:int}",
                self.category_routes.handle_get,
                methods=["GET"],
                name="get_category",
            ),
            Route(
                "/categories/{category_id:int}",
                self.category_routes.handle_update,
                methods=["PUT"],
                name="update_category",
            ),
            Route(
                "/categories/{category_id:int}",
                self.category_routes.handle_delete,
                methods=["DELETE"],
                name="delete_category",
            ),
            Route("/theme", self.theme_routes.handle_get, methods=["GET"], name="get_theme"),
            Route("/theme", self.theme_routes.handle_set, methods=["POST"], name="set_theme"),
        ]
        return app_routes

    @contextlib.asynccontextmanager
    async def _lifespan(self, app: Starlette):
        if self.initialize_on_startup:
            await self.store.initialize()
        yield
        if self.close_store_on_shutdown:
            await self.store.close()
            logger.info("Store closed")

    def build(self) -> Starlette:
        """Build the Starlette app with API key and CORS middleware"""
        app = Starlette(
            routes=self.routes(),
            exception_handlers={HTTPException: _http_exception_handler},
            lifespan=self._lifespan,
        )

        # The API key check wraps the routes; CORS is added last so it is
        # the outermost layer and answers preflight requests itself
        app.add_middleware(APIKeyMiddleware, api_key=self.api_key)

        allowed_origins = ["*"] if self.cors_allow_all else self.cors_origins
        if self.cors_allow_all:
            logger.info("CORS: Allowing all origins (development mode)")
        else:
            logger.info(f"CORS: Allowing origins: {allowed_origins}")
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials=not self.cors_allow_all,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        app.state.store = self.store
        return app

from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import TodoApiError
from .logging_config import setup_logging
from .routers import stats as stats_router
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .store import InMemoryTodoStore

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "meta", "description": "Service description endpoints."},
    {
        "name": "todos",
        "description": "CRUD operations for Todo items with filtering and sorting.",
    },
    {"name": "stats", "description": "Summary statistics over all todos."},
]

ENDPOINTS = {
    "GET /todos": "Get all todos (supports ?completed, ?priority, ?search, ?sortBy, ?order)",
    "POST /todos": "Create a new todo",
    "GET /todos/:id": "Get a specific todo",
    "PUT /todos/:id": "Update a todo",
    "DELETE /todos/:id": "Delete a todo",
    "GET /stats": "Get todo statistics",
}


def _add_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TodoApiError)
    async def todo_api_error_handler(request: Request, exc: TodoApiError) -> JSONResponse:
        """Map domain errors onto their status code and ``{"error", "details"?}`` body."""
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return the same structure as payload validation for request parsing errors.

        Response format:
            {
                "error": "Validation failed",
                "details": ["<location>: <message>", ...]
            }
        """
        details = [
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation failed", "details": details},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods are both "no such route"
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Route not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


# PUBLIC_INTERFACE
def create_app(store: Optional[InMemoryTodoStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Store to serve; a fresh empty one is created when omitted.
        settings: Settings to apply; read from the environment when omitted.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Todo API",
        description="In-memory todo service with filtering, sorting and statistics.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        redirect_slashes=False,
    )
    app.state.store = store if store is not None else InMemoryTodoStore()

    # Configure CORS based on settings (CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s -> %s (%.1fms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    _add_exception_handlers(app)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Describe API", tags=["meta"])
    async def describe_routes():
        """
        List the available routes.

        Returns:
            A JSON object with a service message and a route map.
        """
        return {"message": "Todo API", "endpoints": ENDPOINTS}

    # Include routers
    app.include_router(todos_router.router)
    app.include_router(stats_router.router)
    return app


app = create_app()

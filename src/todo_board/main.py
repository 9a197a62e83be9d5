import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import NotFoundError
from .routers import procedures as procedures_router
from .settings import get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "procedures",
        "description": "Named todo procedures: createTodo, getTodos, updateTodoTitle, updateTodoStatus, deleteTodo.",
    },
]

app = FastAPI(
    title="Todo Board",
    description="Drag-and-drop todo board backend exposing named remote procedures.",
    version="0.1.0",
    openapi_tags=openapi_tags,
)

_settings = get_settings()

# Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=not allow_all,
    allow_methods=["*"],
    allow_headers=["*"],
)

_STATUS_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_SUPPORTED",
    500: "INTERNAL_SERVER_ERROR",
}


def _procedure_name(request: Request) -> str:
    path = request.url.path
    prefix = procedures_router.PROCEDURE_PREFIX + "/"
    return path[len(prefix):] if path.startswith(prefix) else path


# PUBLIC_INTERFACE
def error_response(
    request: Request,
    http_status: int,
    message: str,
    issues: Optional[List[Any]] = None,
) -> JSONResponse:
    """
    Build the error envelope returned by every procedure.

    Response format:
        {
            "error": {
                "code": "BAD_REQUEST" | "NOT_FOUND" | ...,
                "message": "...",
                "httpStatus": 400,
                "path": "createTodo",
                "issues": [... pydantic error details, validation only ...]
            }
        }
    """
    body: Dict[str, Any] = {
        "code": _STATUS_CODES.get(http_status, "INTERNAL_SERVER_ERROR"),
        "message": message,
        "httpStatus": http_status,
        "path": _procedure_name(request),
    }
    if issues is not None:
        body["issues"] = jsonable_encoder(issues)
    return JSONResponse(status_code=http_status, content={"error": body})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed procedure input before it reaches the service."""
    errors = exc.errors()
    logger.info("procedure_rejected path=%s issues=%s", _procedure_name(request), len(errors))
    return error_response(request, 400, "Input validation failed", issues=list(errors))


@app.exception_handler(NotFoundError)
async def not_found_exception_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(request, 404, str(exc))


@app.exception_handler(StarletteHTTPException)
async def procedure_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown procedures and wrong HTTP methods answer with the procedure envelope."""
    if not request.url.path.startswith(procedures_router.PROCEDURE_PREFIX + "/"):
        return await http_exception_handler(request, exc)
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404:
        message = f"No procedure found on path '{_procedure_name(request)}'"
    return error_response(request, exc.status_code, message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("procedure_failed path=%s", _procedure_name(request))
    return error_response(request, 500, "Internal server error")


# PUBLIC_INTERFACE
@app.get("/", summary="Health Check", tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health.
    """
    return {"message": "Healthy", "backend": _settings.persistence_backend}


# Include routers
app.include_router(procedures_router.router)

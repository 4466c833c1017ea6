"""HTTP server exposing the AI developer tools via FastAPI.

Endpoints implement a thin HTTP transport over the same dispatcher used by
the stdio MCP server: REST-style ``POST /tools/{name}`` calls plus a
JSON-RPC 2.0 MCP endpoint at ``POST /mcp/http``. Authentication and CORS
are configurable via environment variables.
"""

from __future__ import annotations

import importlib
import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import psutil
from pydantic import BaseModel, Field
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .. import __version__
from ..config.models import EnvSettings
from ..observability import setup_logging
from ..utils.correlation import set_request_id
from .app import DevToolsMCPServer, create_server
from .models import ToolDescriptor, ToolResult

logger = logging.getLogger(__name__)

MCP_PROTOCOL_VERSION = "2024-11-05"

_STATUS_BY_ERROR_TYPE: Dict[str, int] = {
    "invalid_argument": 400,
    "unknown_tool": 404,
    "unknown_operation": 404,
    "internal_error": 500,
}


class RequestLoggingMiddleware(
    BaseHTTPMiddleware
):  # pylint: disable=too-few-public-methods
    """Assign a correlation id per request and log tool and MCP traffic."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        path = request.url.path
        req_id = request.headers.get("x-correlation-id") or str(uuid.uuid4())
        set_request_id(req_id)
        tracked = path.startswith("/mcp") or path.startswith("/tools/")

        if tracked:
            logger.info(
                "http.request.received",
                extra={
                    "req_id": req_id,
                    "method": request.method,
                    "path": path,
                    "client": request.client.host if request.client else "unknown",
                },
            )
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "http.request.failed",
                extra={
                    "req_id": req_id,
                    "method": request.method,
                    "path": path,
                    "error": str(e),
                    "duration_ms": int((time.time() - start_time) * 1000),
                },
                exc_info=True,
            )
            raise
        if tracked:
            logger.info(
                "http.request.completed",
                extra={
                    "req_id": req_id,
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": int((time.time() - start_time) * 1000),
                },
            )
        response.headers["x-correlation-id"] = req_id
        return response


class HealthResponse(BaseModel):
    """Simple health/readiness response model."""

    status: str


class ErrorResponse(BaseModel):
    """Structured JSON error response for HTTP endpoints.

    Fields
    ------
    detail: str
        Human-readable explanation of the error.
    error_type: str
        Machine-readable error classification.
    available_options: list[str] | None
        Valid alternatives when the error is about an unknown tool id or
        tool name.
    """

    detail: str = Field(..., description="Human-readable error detail")
    error_type: str = Field(..., description="Machine-readable error type")
    available_options: List[str] | None = Field(
        default=None, description="Optional list of valid alternative options"
    )


class CapabilitiesResponse(BaseModel):
    """Server capabilities summary for diagnostics and clients."""

    version: str
    http_auth: str
    cors_origins: List[str]
    tools: List[str]
    dataset_tools: List[str]


class ToolCallResponse(BaseModel):
    """Successful REST tool call: the rendered report."""

    tool: str
    text: str


class ToolListResponse(BaseModel):
    tools: List[ToolDescriptor]


class MCPHTTPRequest(BaseModel):
    """JSON-RPC 2.0 request model for MCP-over-HTTP."""

    jsonrpc: str
    method: str
    id: str | int | None = None
    params: Dict[str, Any] | None = None


def _ok(req_id: str | int | None, result: Any) -> Dict[str, Any]:
    """Build a JSON-RPC success envelope for the given result."""
    return {"jsonrpc": "2.0", "id": req_id, "result": result}


def _err(
    req_id: str | int | None, code: int, message: str, data: Any | None = None
) -> Dict[str, Any]:
    """Build a JSON-RPC error envelope with optional data payload."""
    err: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        err["data"] = data
    return {"jsonrpc": "2.0", "id": req_id, "error": err}


def _load_fastapi():
    """Dynamically import FastAPI pieces so stdio-only use never loads them."""
    fastapi_mod = importlib.import_module("fastapi")
    cors_mod = importlib.import_module("fastapi.middleware.cors")
    exc_mod = importlib.import_module("fastapi.exceptions")
    resp_mod = importlib.import_module("fastapi.responses")
    st_exc_mod = importlib.import_module("starlette.exceptions")
    return {
        "fastapi_cls": getattr(fastapi_mod, "FastAPI"),
        "depends": getattr(fastapi_mod, "Depends"),
        "header": getattr(fastapi_mod, "Header"),
        "body": getattr(fastapi_mod, "Body"),
        "http_exc": getattr(fastapi_mod, "HTTPException"),
        "status": getattr(fastapi_mod, "status"),
        "cors_mw": getattr(cors_mod, "CORSMiddleware"),
        "validation_exc": getattr(exc_mod, "RequestValidationError"),
        "json_response": getattr(resp_mod, "JSONResponse"),
        "starlette_http_exc": getattr(st_exc_mod, "HTTPException"),
    }


def _cors_origins() -> List[str]:
    origins = os.environ.get("DEVTOOLS_MCP_CORS_ORIGINS", "")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _apply_cors_env(app: Any, cors_middleware_cls: Any) -> None:
    """Enable CORS if DEVTOOLS_MCP_CORS_ORIGINS is set."""
    allow_origins = _cors_origins()
    if allow_origins:
        app.add_middleware(
            cors_middleware_cls,
            allow_origins=allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )


def _get_expected_token() -> str | None:
    """Return expected bearer token from environment, or ``None`` if disabled.

    Environment variable: ``DEVTOOLS_MCP_HTTP_TOKEN``.
    """
    token = os.environ.get("DEVTOOLS_MCP_HTTP_TOKEN")
    return token if token else None


def _make_auth_dependency(header: Any, http_exc: Any, status_mod: Any):
    """Return a dependency function that enforces optional bearer token."""

    def _auth_dependency(authorization: str | None = header(default=None)) -> None:
        expected = _get_expected_token()
        if expected is None:
            return
        if not authorization or not authorization.startswith("Bearer "):
            raise http_exc(status_code=status_mod.HTTP_401_UNAUTHORIZED)
        token = authorization.split(" ", 1)[1]
        if token != expected:
            raise http_exc(status_code=status_mod.HTTP_403_FORBIDDEN)

    return _auth_dependency


def _log_startup_memory() -> None:
    try:
        mem_info = psutil.Process().memory_info()
    except (psutil.Error, OSError):  # pragma: no cover
        return
    logger.info(
        "http.startup.memory",
        extra={
            "rss_mb": round(mem_info.rss / 1024 / 1024, 1),
            "vms_mb": round(mem_info.vms / 1024 / 1024, 1),
        },
    )


def _register_health(app: Any) -> None:
    """Register health and readiness endpoints."""

    @app.get("/health", response_model=HealthResponse, summary="Liveness probe")
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/ready", response_model=HealthResponse, summary="Readiness probe")
    async def ready() -> HealthResponse:
        return HealthResponse(status="ready")


def _register_capabilities(app: Any, server: DevToolsMCPServer) -> None:
    """Register server capabilities endpoint."""

    @app.get(
        "/capabilities",
        response_model=CapabilitiesResponse,
        summary="Server capabilities summary",
    )
    async def capabilities() -> CapabilitiesResponse:  # noqa: D401
        return CapabilitiesResponse(
            version=__version__,
            http_auth=("enabled" if _get_expected_token() else "disabled"),
            cors_origins=_cors_origins(),
            tools=server.tool_names,
            dataset_tools=server.dataset.ids(),
        )


def _register_tools(
    app: Any,
    server: DevToolsMCPServer,
    depends: Any,
    http_exc: Any,
    body: Any,
    auth_dep: Any,
) -> None:
    """Register tool discovery and REST-style tool invocation."""

    @app.get(
        "/tools",
        response_model=ToolListResponse,
        dependencies=[depends(auth_dep)],
        summary="List registered tools with their input schemas",
    )
    async def list_tools() -> ToolListResponse:
        return ToolListResponse(tools=server.list_tools())

    @app.post(
        "/tools/{name}",
        response_model=ToolCallResponse,
        dependencies=[depends(auth_dep)],
        summary="Invoke a tool and return its rendered report",
        responses={
            400: {"model": ErrorResponse},
            401: {"description": "Unauthorized"},
            403: {"description": "Forbidden"},
            404: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    async def call_tool(
        name: str, arguments: Optional[Dict[str, Any]] = body(default=None)
    ) -> ToolCallResponse:
        result: ToolResult = await server.invoke(name, arguments)
        if result.is_error:
            err = ErrorResponse(
                detail=result.text,
                error_type=result.error_type or "internal_error",
                available_options=result.available_options,
            )
            raise http_exc(
                status_code=_STATUS_BY_ERROR_TYPE.get(err.error_type, 500),
                detail=err.model_dump(),
            )
        logger.info("http.tool.success", extra={"tool": name, "chars": len(result.text)})
        return ToolCallResponse(tool=name, text=result.text)


def _register_mcp_over_http(
    app: Any, server: DevToolsMCPServer, depends: Any, auth_dep: Any, server_name: str
) -> None:
    """Register the JSON-RPC 2.0 MCP endpoint at ``/mcp/http``."""

    @app.post("/mcp/http", dependencies=[depends(auth_dep)], summary="MCP JSON-RPC")
    async def mcp_http(req: MCPHTTPRequest) -> Dict[str, Any]:
        if req.jsonrpc != "2.0":
            return _err(req.id, -32600, "Invalid Request: jsonrpc must be '2.0'")
        params = req.params or {}
        logger.debug("mcp.http.method", extra={"method": req.method, "id": req.id})

        if req.method == "initialize":
            return _ok(
                req.id,
                {
                    "protocolVersion": MCP_PROTOCOL_VERSION,
                    "capabilities": {"tools": {"listChanged": False}},
                    "serverInfo": {"name": server_name, "version": __version__},
                },
            )
        if req.method == "ping":
            return _ok(req.id, {})
        if req.method == "tools/list":
            return _ok(
                req.id, {"tools": [d.model_dump() for d in server.list_tools()]}
            )
        if req.method == "tools/call":
            name = params.get("name")
            if not isinstance(name, str) or not name:
                return _err(req.id, -32602, "Invalid params: 'name' is required")
            result = await server.invoke(name, params.get("arguments"))
            return _ok(req.id, result.to_mcp())
        return _err(req.id, -32601, f"Method not found: {req.method}")


def create_app(
    server: Optional[DevToolsMCPServer] = None,
    settings: Optional[EnvSettings] = None,
):
    """Create and configure the FastAPI application.

    The HTTP layer is intentionally thin and defers to the shared
    dispatcher. ``server`` defaults to one built from ``settings``, which in
    turn default to the environment.
    """
    settings = settings if settings is not None else EnvSettings()
    # Respect prior logging configuration from CLI; otherwise use env setting
    if not logging.getLogger().hasHandlers():
        setup_logging(settings.log_level)
    parts = _load_fastapi()
    if server is None:
        server = create_server(settings)

    @asynccontextmanager
    async def lifespan(_app: Any):
        logger.info("http.startup")
        _log_startup_memory()
        await server.start()
        try:
            yield
        finally:
            logger.info("http.shutdown")
            await server.stop()

    app = parts["fastapi_cls"](
        title="AI Developer Tools MCP Server", version=__version__, lifespan=lifespan
    )
    jr = parts["json_response"]

    @app.exception_handler(parts["validation_exc"])
    async def validation_exception_handler(_request: Any, exc: Exception):  # noqa: D401
        err = ErrorResponse(
            detail=str(exc), error_type="validation_error", available_options=None
        )
        return jr(status_code=400, content={"detail": err.model_dump()})

    @app.exception_handler(parts["starlette_http_exc"])
    async def http_exception_handler(_request: Any, exc: Any):  # noqa: D401
        detail = getattr(exc, "detail", "")
        if isinstance(detail, dict) and {"detail", "error_type"} <= detail.keys():
            payload = detail
        else:
            payload = ErrorResponse(
                detail=str(detail) or "HTTP error",
                error_type="http_error",
                available_options=None,
            ).model_dump()
        return jr(status_code=exc.status_code, content={"detail": payload})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_request: Any, exc: Exception):  # noqa: D401
        logger.error("http.unhandled_exception", exc_info=exc)
        err = ErrorResponse(
            detail="Internal error. See server logs for request id.",
            error_type="internal_server_error",
            available_options=None,
        )
        return jr(status_code=500, content={"detail": err.model_dump()})

    _ = (
        validation_exception_handler,
        http_exception_handler,
        unhandled_exception_handler,
    )

    app.add_middleware(RequestLoggingMiddleware)
    _apply_cors_env(app, parts["cors_mw"])
    auth_dep = _make_auth_dependency(
        parts["header"], parts["http_exc"], parts["status"]
    )
    _register_health(app)
    _register_capabilities(app, server)
    _register_tools(
        app, server, parts["depends"], parts["http_exc"], parts["body"], auth_dep
    )
    _register_mcp_over_http(
        app, server, parts["depends"], auth_dep, settings.server_name
    )
    logger.info(
        "http.app.created",
        extra={
            "tools": server.tool_names,
            "http_auth": "enabled" if _get_expected_token() else "disabled",
        },
    )
    return app

"""
FastAPI Server for the Lifecycle Engine.

Provides REST endpoints for listing and calling tools, plus a JSON-RPC 2.0
endpoint that speaks the tools/list and tools/call methods.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

import uvicorn
from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config import configure_logging, load_config
from ..exceptions import ToolArgumentError, UnknownToolError
from ..lifecycle import LifecycleEngine
from ..tools import ToolDispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "lifecycle-engine"

# JSON-RPC 2.0 error codes
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request envelope."""
    jsonrpc: str = Field("2.0", description="Protocol version, always '2.0'")
    id: Optional[Union[int, str]] = Field(None, description="Request ID; absent for notifications")
    method: str = Field(..., description="Method name")
    params: Dict[str, Any] = Field(default_factory=dict)


# Global components (initialized on startup)
config: Dict[str, Any] = {}
engine: Optional[LifecycleEngine] = None
dispatcher: Optional[ToolDispatcher] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global config, engine, dispatcher

    logger.info("Initializing Lifecycle Engine API server components")

    config = load_config()
    engine = LifecycleEngine.from_config(config)
    dispatcher = ToolDispatcher(engine)

    logger.info("Lifecycle Engine API server components initialized")

    yield

    logger.info("Shutting down Lifecycle Engine API server")


app = FastAPI(
    title="Lifecycle Engine API",
    description="Employee onboarding and offboarding workflow engine",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_dispatcher() -> ToolDispatcher:
    if not dispatcher:
        raise HTTPException(status_code=503, detail="Tool dispatcher not available")
    return dispatcher


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Lifecycle Engine API", "version": __version__, "status": "running"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {
            "engine": engine is not None,
            "dispatcher": dispatcher is not None,
            "audit_logger": engine is not None and engine.audit_logger is not None,
        },
        "records": {
            "onboarding": len(engine.onboarding_store) if engine else 0,
            "offboarding": len(engine.offboarding_store) if engine else 0,
        },
    }


@app.get("/tools")
async def list_tools():
    """List every tool with its input schema."""
    return {"tools": _get_dispatcher().list_tools()}


@app.post("/tools/{tool_name}")
def call_tool(tool_name: str, arguments: Optional[Dict[str, Any]] = Body(None)):
    """
    Call one tool with named arguments.

    The engine result is returned verbatim as the response body, including
    structured failures such as unknown employees.
    """
    tool_dispatcher = _get_dispatcher()
    try:
        return tool_dispatcher.call_tool(tool_name, arguments or {})
    except UnknownToolError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ToolArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.exception(f"Error calling tool {tool_name}")
        raise HTTPException(status_code=500, detail="Internal error") from e


@app.post("/mcp")
def json_rpc(request: JsonRpcRequest):
    """JSON-RPC 2.0 endpoint for tool-calling clients."""
    tool_dispatcher = _get_dispatcher()

    if request.jsonrpc != "2.0":
        return _rpc_error(request.id, INVALID_REQUEST, "Only JSON-RPC 2.0 is supported")

    if request.method == "initialize":
        return _rpc_result(request.id, {
            "protocolVersion": request.params.get("protocolVersion", "2024-11-05"),
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
            "capabilities": {"tools": {}},
        })

    if request.method == "tools/list":
        return _rpc_result(request.id, {"tools": tool_dispatcher.list_tools()})

    if request.method == "tools/call":
        name = request.params.get("name")
        if not isinstance(name, str) or not name:
            return _rpc_error(request.id, INVALID_PARAMS, "Missing tool name")

        arguments = request.params.get("arguments") or {}
        if not isinstance(arguments, dict):
            return _rpc_error(request.id, INVALID_PARAMS, "Tool arguments must be an object")

        if name not in tool_dispatcher.tools:
            return _rpc_error(request.id, INVALID_PARAMS, f"Unknown tool: {name}")

        # Argument and engine failures travel inside the content envelope
        return _rpc_result(request.id, tool_dispatcher.dispatch_as_content(name, arguments))

    return _rpc_error(request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}")


def _rpc_result(request_id: Optional[Union[int, str]], result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _rpc_error(request_id: Optional[Union[int, str]], code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}


def start_server(host: str = "127.0.0.1", port: int = 8000, reload: bool = False, log_level: str = "info"):
    """Start the FastAPI server."""
    configure_logging(log_level)
    uvicorn.run(
        "lifecycle_engine.api.server:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level.lower(),
    )


if __name__ == "__main__":
    start_server()

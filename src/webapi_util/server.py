"""ASGI handler adaptor and blocking server start."""

import asyncio
import inspect
import logging
import socket
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

import uvicorn
from fastapi import FastAPI, Request, Response

from .config import ServerSettings, bind_address, parse_bind_address, resolve_port
from .errors import ServeError
from .sink import ResponseSink

logger = logging.getLogger(__name__)

Handler = Callable[[Request, ResponseSink], Union[None, Awaitable[None]]]

HANDLER_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def make_app(handler: Handler) -> FastAPI:
    """Wrap a ``(request, sink)`` handler into an ASGI application.

    Every path and method is routed to ``handler``. Coroutine handlers are
    awaited; plain functions run in a worker thread.
    """
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

    async def dispatch(request: Request) -> Response:
        sink = ResponseSink()
        if inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(
            getattr(handler, "__call__", None)
        ):
            await handler(request, sink)
        else:
            result = await asyncio.to_thread(handler, request, sink)
            if inspect.isawaitable(result):
                await result
        return sink.to_response()

    app.add_api_route(
        "/{path:path}", dispatch, methods=HANDLER_METHODS, include_in_schema=False
    )
    return app


def bind_socket(host: str, port: int) -> socket.socket:
    """Open a listening TCP socket; bind errors propagate unchanged."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except (OSError, OverflowError):
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def start_server(
    default_port: int,
    app: Any,
    env: Optional[Mapping[str, str]] = None,
    settings: Optional[ServerSettings] = None,
) -> None:
    """Serve ``app`` on ``PORT`` from ``env`` or ``default_port``.

    Blocks until the listener terminates.

    Args:
        default_port: Port used when ``PORT`` is unset or empty.
        app: Any ASGI application, e.g. the result of :func:`make_app`.
        env: Environment mapping; ``None`` means ``os.environ``.
        settings: Runtime tuning; loaded from the environment when omitted.

    Raises:
        PortParseError: If the resolved port is not a 32-bit integer. No
            socket is bound in that case.
        OSError: Bind failures, as raised by the socket layer.
        ServeError: If uvicorn stopped without ever starting.
    """
    port = resolve_port(env, default_port)
    address = bind_address(port)
    host, port_number = parse_bind_address(address)

    if settings is None:
        settings = ServerSettings.from_env()

    sock = bind_socket(host, port_number)
    logger.info(f"Starting server on {address}")

    config = uvicorn.Config(
        app,
        log_level=settings.log_level.lower(),
        timeout_keep_alive=settings.timeout_keep_alive,
        access_log=False,
    )
    server = uvicorn.Server(config)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()

    if not server.started:
        raise ServeError(f"server on {address} failed to start")
    logger.info(f"Server on {address} stopped")

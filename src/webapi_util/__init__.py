"""
webapi_util - helpers for JSON-over-HTTP web APIs

Architecture:
- sink.py: write-once response handle
- decoding.py: JSON request body decoding
- responses.py: canonical success and error responses
- config.py: port resolution and runtime settings
- server.py: ASGI handler adaptor and blocking server start
"""

from .config import ServerSettings, bind_address, get_port, resolve_port
from .decoding import decode_json, decode_request
from .errors import (
    DecodeError,
    PortParseError,
    SerializeError,
    ServeError,
    WebApiError,
    WriteError,
)
from .responses import (
    bad_request,
    empty_ok,
    forbidden,
    internal_error,
    json_ok,
    method_not_allowed,
    not_found,
    text_ok,
    unauthorized,
)
from .server import make_app, start_server
from .sink import ResponseSink

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "PortParseError",
    "ResponseSink",
    "SerializeError",
    "ServeError",
    "ServerSettings",
    "WebApiError",
    "WriteError",
    "bad_request",
    "bind_address",
    "decode_json",
    "decode_request",
    "empty_ok",
    "forbidden",
    "get_port",
    "internal_error",
    "json_ok",
    "make_app",
    "method_not_allowed",
    "not_found",
    "resolve_port",
    "start_server",
    "text_ok",
    "unauthorized",
]

"""Canonical success and error responses written to a ResponseSink.

Error responses are always plain text: ``<reason phrase>[ <detail>]\\n``.
Once any status or body byte has been committed, a fallback error can only
append text; it cannot change the status line.
"""

import json
from http import HTTPStatus
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder

from .errors import SerializeError
from .sink import ResponseSink

TEXT_CONTENT_TYPE = "text/plain"
JSON_CONTENT_TYPE = "application/json"
ERROR_CONTENT_TYPE = "text/plain; charset=utf-8"


def empty_ok(sink: ResponseSink) -> None:
    """200 with no body and no Content-Type."""
    sink.write_header(HTTPStatus.OK)


def text_ok(sink: ResponseSink, text: str) -> None:
    """200 with ``text`` written verbatim as text/plain."""
    sink.headers["Content-Type"] = TEXT_CONTENT_TYPE
    try:
        sink.write(text.encode("utf-8"))
    except OSError as e:
        internal_error(sink, e)


def encode_json(value: Any) -> bytes:
    """Encode ``value`` as compact UTF-8 JSON.

    Raises:
        SerializeError: If the value has no JSON representation.
    """
    try:
        return json.dumps(
            jsonable_encoder(value),
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializeError(str(e)) from e


def json_ok(sink: ResponseSink, value: Any) -> None:
    """200 with ``value`` encoded as application/json.

    ``None`` behaves like :func:`empty_ok`. Encoding failures produce a 500.
    """
    if value is None:
        empty_ok(sink)
        return

    try:
        payload = encode_json(value)
    except SerializeError as e:
        internal_error(sink, e)
        return

    sink.headers["Content-Type"] = JSON_CONTENT_TYPE
    try:
        sink.write(payload)
    except OSError as e:
        internal_error(sink, e)


def _error_response(sink: ResponseSink, code: int, err: Optional[BaseException] = None) -> None:
    message = HTTPStatus(code).phrase
    if err is not None:
        message = f"{message} {err}"

    headers = sink.headers
    if "content-length" in headers:
        del headers["content-length"]
    headers["Content-Type"] = ERROR_CONTENT_TYPE
    headers["X-Content-Type-Options"] = "nosniff"
    sink.write_header(code)
    sink.write(f"{message}\n".encode("utf-8"))


def bad_request(sink: ResponseSink, err: Optional[BaseException] = None) -> None:
    """400 Bad Request."""
    _error_response(sink, HTTPStatus.BAD_REQUEST, err)


def unauthorized(sink: ResponseSink, err: Optional[BaseException] = None) -> None:
    """401 Unauthorized."""
    _error_response(sink, HTTPStatus.UNAUTHORIZED, err)


def forbidden(sink: ResponseSink, err: Optional[BaseException] = None) -> None:
    """403 Forbidden."""
    _error_response(sink, HTTPStatus.FORBIDDEN, err)


def not_found(sink: ResponseSink, err: Optional[BaseException] = None) -> None:
    """404 Not Found."""
    _error_response(sink, HTTPStatus.NOT_FOUND, err)


def method_not_allowed(sink: ResponseSink, err: Optional[BaseException] = None) -> None:
    """405 Method Not Allowed."""
    _error_response(sink, HTTPStatus.METHOD_NOT_ALLOWED, err)


def internal_error(sink: ResponseSink, err: Optional[BaseException] = None) -> None:
    """500 Internal Server Error."""
    _error_response(sink, HTTPStatus.INTERNAL_SERVER_ERROR, err)

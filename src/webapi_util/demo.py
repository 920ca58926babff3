"""Echo server showing the request/response helpers end to end."""

import logging
import sys
from typing import List

from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import ServerSettings
from .decoding import decode_request
from .errors import DecodeError
from .responses import internal_error, json_ok, method_not_allowed
from .server import make_app, start_server
from .sink import ResponseSink

DEFAULT_PORT = 8080

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class EchoBody(BaseModel):
    """Request and response payload of the echo endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    i_64: int = 0
    text: str = Field(default="", alias="str")
    a_int: List[int] = Field(default_factory=list)
    a_str: List[str] = Field(default_factory=list)


async def echo_handler(request: Request, sink: ResponseSink) -> None:
    """Increment every integer and append "a" to every string."""
    if request.method != "POST":
        method_not_allowed(sink)
        return

    try:
        body = await decode_request(request, EchoBody)
    except DecodeError as e:
        internal_error(sink, e)
        return

    body.i_64 += 1
    body.text += "a"
    body.a_int = [i + 1 for i in body.a_int]
    body.a_str = [s + "a" for s in body.a_str]
    json_ok(sink, body)


app = make_app(echo_handler)


def main():
    """Entry point for webapi-util-demo command."""
    logger = logging.getLogger(__name__)

    try:
        settings = ServerSettings.from_env()
    except ValidationError as e:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error(f"Invalid settings: {e}")
        sys.exit(1)

    logging.basicConfig(level=getattr(logging, settings.log_level), format=LOG_FORMAT)

    try:
        start_server(DEFAULT_PORT, app, settings=settings)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Server startup failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

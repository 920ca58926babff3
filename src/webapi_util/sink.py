"""Write-once response handle used by the response helpers."""

import logging
from typing import Optional

from starlette.datastructures import MutableHeaders
from starlette.responses import Response

from .errors import WriteError

logger = logging.getLogger(__name__)


class ResponseSink:
    """Buffered, write-once HTTP response.

    Headers may be changed freely until the status is committed, either
    explicitly through ``write_header`` or implicitly by the first ``write``.
    From then on the status line and header set are frozen; later header
    edits are silently discarded and a second ``write_header`` is ignored.
    """

    def __init__(self):
        self._headers = MutableHeaders()
        self._sent_headers: Optional[MutableHeaders] = None
        self._status_code: Optional[int] = None
        self._body = bytearray()
        self._finished = False

    @property
    def headers(self) -> MutableHeaders:
        if self._sent_headers is not None:
            # Edits after commit land on a throwaway copy.
            return self._sent_headers.mutablecopy()
        return self._headers

    @property
    def status_code(self) -> Optional[int]:
        return self._status_code

    @property
    def committed(self) -> bool:
        return self._status_code is not None

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def write_header(self, status_code: int) -> None:
        """Commit the status code and the current header set."""
        if self._status_code is not None:
            logger.warning(
                f"superfluous write_header({status_code}) call, "
                f"status {self._status_code} already committed"
            )
            return
        self._status_code = int(status_code)
        self._sent_headers = self._headers.mutablecopy()

    def write(self, data: bytes) -> int:
        """Append body bytes, committing status 200 if nothing was committed yet.

        Raises:
            WriteError: If the sink has already been turned into a response.
        """
        if self._finished:
            raise WriteError("write on finished response")
        if self._status_code is None:
            self.write_header(200)
        self._body.extend(data)
        return len(data)

    def to_response(self) -> Response:
        """Finish the sink and build the Starlette response it describes."""
        if self._status_code is None:
            self.write_header(200)
        self._finished = True
        response = Response(content=bytes(self._body), status_code=self._status_code)
        if "content-length" in self._sent_headers:
            del response.headers["content-length"]
        # Repeated headers such as Set-Cookie keep every value.
        for key, value in self._sent_headers.items():
            response.headers.append(key, value)
        return response

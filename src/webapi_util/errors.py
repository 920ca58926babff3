"""Exception types raised by webapi_util."""

from typing import Optional


class WebApiError(Exception):
    """Base class for all webapi_util errors."""

    pass


class DecodeError(WebApiError):
    """Request body could not be read or mapped onto the target."""

    pass


class SerializeError(WebApiError):
    """A response value could not be encoded as JSON."""

    pass


class WriteError(WebApiError, OSError):
    """Writing to a response sink failed."""

    pass


class PortParseError(WebApiError, ValueError):
    """Resolved port is not a signed 32-bit decimal integer."""

    def __init__(self, value: str, reason: Optional[str] = None):
        message = f"invalid port {value!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.value = value


class ServeError(WebApiError):
    """The HTTP listener stopped without ever starting."""

    pass

"""Decoding of JSON request bodies into caller-supplied structures."""

import logging
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError
from starlette.requests import ClientDisconnect, Request

from .errors import DecodeError

logger = logging.getLogger(__name__)


def decode_json(data: bytes, target: Any) -> Any:
    """Map a JSON document onto ``target``.

    Args:
        data: Raw JSON bytes (UTF-8).
        target: Either a type pydantic can validate (model class, dataclass,
            ``List[int]``...) or an existing ``BaseModel`` instance. Instances
            are updated in place with only the fields present in the
            document; other fields keep their current values.

    Returns:
        The newly validated value, or ``target`` itself when an instance
        was passed.

    Raises:
        DecodeError: If the document is not valid JSON or does not fit the
            target's shape.
    """
    if isinstance(target, BaseModel):
        try:
            decoded = type(target).model_validate_json(data, strict=True)
        except ValidationError as e:
            raise DecodeError(str(e)) from e
        for name in decoded.model_fields_set:
            setattr(target, name, getattr(decoded, name))
        return target

    try:
        return TypeAdapter(target).validate_json(data, strict=True)
    except ValidationError as e:
        raise DecodeError(str(e)) from e


async def decode_request(request: Request, target: Any) -> Any:
    """Read the body of ``request`` and decode it with :func:`decode_json`.

    The Content-Type header is not inspected. The request is closed before
    this coroutine returns or raises.
    """
    try:
        body = await request.body()
    except (ClientDisconnect, OSError) as e:
        raise DecodeError(f"failed to read request body: {e}") from e
    finally:
        await request.close()

    logger.debug(f"Decoding {len(body)} byte request body")
    return decode_json(body, target)

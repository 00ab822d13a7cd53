"""Envelope writer.

Turns a handler outcome into an ``EnvelopeResponse``:

- success: 200, ``{"status":"OK","response":<value>}``
- error:   500, ``{"status":"ERROR","error":"<message>"}``

``Content-Type: application/json`` is set on both paths. An envelope that
cannot be serialized raises ``EnvelopeSerializationError`` while the response
is built; a client that goes away while the body is sent is only logged.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic_core import PydanticSerializationError
from starlette.requests import ClientDisconnect
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from easyrest.error_handler import EnvelopeSerializationError
from easyrest.models.envelope import Envelope

logger = logging.getLogger(__name__)


class EnvelopeResponse(Response):
    """Starlette response whose body is a rendered ``Envelope``."""

    media_type = "application/json"

    def __init__(self, content: Envelope, status_code: int = 200) -> None:
        self.envelope = content
        super().__init__(content, status_code=status_code)

    def render(self, content: Envelope) -> bytes:
        try:
            return content.render()
        except (PydanticSerializationError, ValueError) as exc:
            raise EnvelopeSerializationError(
                type(content.response).__name__, exc
            ) from exc

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except (OSError, ClientDisconnect) as exc:
            logger.warning(
                "failed to write content (%s) to client: %s",
                self.body.decode("utf-8", errors="replace"),
                exc,
                extra={"path": scope.get("path")},
            )


def write_json(content: Envelope, status_code: int = 200) -> EnvelopeResponse:
    """Render ``content`` as the response body with ``status_code``."""
    return EnvelopeResponse(content, status_code=status_code)


def write_success(response: Any) -> EnvelopeResponse:
    return write_json(Envelope.success(response))


def write_error(error: BaseException) -> EnvelopeResponse:
    return write_json(Envelope.failure(str(error)), status_code=500)


def write_response(
    response: Any = None, error: BaseException | None = None
) -> EnvelopeResponse:
    """Write ``error`` when there is one, otherwise ``response``."""
    if error is not None:
        return write_error(error)
    return write_success(response)

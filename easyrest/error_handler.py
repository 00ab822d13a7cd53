"""Error hierarchy and FastAPI/Starlette exception handlers.

All easyrest errors extend EasyRestError. Request-level failures (decode
errors, handler errors) never leave an endpoint built by ``easyrest.adapter``;
they are answered with an ERROR envelope there. What does leave an endpoint is
a defect: an envelope that cannot be serialized. ``register_error_handlers``
decides what happens to those, and gives any other unhandled exception the
same envelope shape.
"""

from __future__ import annotations

import logging
import os
import traceback

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

# Exit status used when a serialization defect aborts the process
_ABORT_EXIT_STATUS = 1


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class EasyRestError(Exception):
    """Base error for all easyrest errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class RequestDecodeError(EasyRestError):
    """The request body could not be decoded into the handler's input type."""

    message = "Unable to parse request"

    def __init__(self, target_type: str, reason: object) -> None:
        self.target_type = target_type
        super().__init__(
            f"unable to parse request as type {target_type}: {reason}",
            target_type=target_type,
        )


class EnvelopeSerializationError(EasyRestError):
    """A response envelope could not be serialized to JSON.

    This is a programming error (the handler returned a value with no JSON
    representation) and recurs for every request to the same endpoint.
    """

    message = "Failed to serialize response envelope"

    def __init__(self, content_type: str, reason: object) -> None:
        self.content_type = content_type
        super().__init__(
            f"failed to marshal content (type {content_type}) to JSON: {reason}",
            content_type=content_type,
        )


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


def _internal_error() -> Response:
    """Generic 500 envelope that carries no handler data."""
    # Imported here: writer imports this module for its error classes.
    from easyrest.writer import write_error

    return write_error(EasyRestError())


def _make_serialization_error_handler(abort: bool):
    async def _serialization_error_handler(
        _request: Request, exc: EnvelopeSerializationError
    ) -> Response:
        logger.critical(
            "%s",
            exc.message,
            extra={"content_type": exc.content_type},
        )
        if abort:
            os._exit(_ABORT_EXIT_STATUS)
        return _internal_error()

    return _serialization_error_handler


async def _unhandled_error_handler(_request: Request, exc: Exception) -> Response:
    """Catch-all for unhandled exceptions: log traceback, return generic 500."""
    logger.error(
        "Unhandled exception: %s\n%s",
        exc,
        traceback.format_exc(),
    )
    return _internal_error()


# ---------------------------------------------------------------------------
# Registration helper
# ---------------------------------------------------------------------------


def register_error_handlers(
    app: Starlette, *, abort_on_serialization_error: bool = False
) -> None:
    """Wire up the exception handlers on a FastAPI or Starlette application.

    Parameters
    ----------
    app:
        Application to register the handlers on.
    abort_on_serialization_error:
        Terminate the process with exit status 1 when an envelope cannot be
        serialized, instead of answering with a generic 500 envelope.
    """
    app.add_exception_handler(
        EnvelopeSerializationError,
        _make_serialization_error_handler(abort_on_serialization_error),  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, _unhandled_error_handler)  # type: ignore[arg-type]

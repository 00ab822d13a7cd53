"""easyrest: adapt typed handler functions to JSON-envelope HTTP endpoints."""

from easyrest.adapter import handle_get, handle_post, handle_put
from easyrest.decoders import decode_json_body, query_parameters
from easyrest.error_handler import (
    EasyRestError,
    EnvelopeSerializationError,
    RequestDecodeError,
    register_error_handlers,
)
from easyrest.models.envelope import Envelope, EnvelopeStatus
from easyrest.writer import (
    EnvelopeResponse,
    write_error,
    write_json,
    write_response,
    write_success,
)

__all__ = [
    "EasyRestError",
    "Envelope",
    "EnvelopeResponse",
    "EnvelopeSerializationError",
    "EnvelopeStatus",
    "RequestDecodeError",
    "decode_json_body",
    "handle_get",
    "handle_post",
    "handle_put",
    "query_parameters",
    "register_error_handlers",
    "write_error",
    "write_json",
    "write_response",
    "write_success",
]

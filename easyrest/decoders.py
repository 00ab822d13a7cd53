"""Request decoders.

- ``query_parameters``: read-style verbs. Flattens the query string into a
  ``dict[str, str]``; the first value of a repeated name wins.
- ``decode_json_body``: write-style verbs. Validates the JSON body into the
  handler's declared input type with a pydantic ``TypeAdapter``.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from starlette.requests import Request

from easyrest.error_handler import RequestDecodeError

logger = logging.getLogger(__name__)


def query_parameters(request: Request) -> dict[str, str]:
    """Convert the request's multi-valued query string to a single-valued map.

    A name given without a value maps to ``""``. Extra values of a repeated
    name are discarded and logged once per name.
    """
    params: dict[str, str] = {}
    repeated: list[str] = []
    for name, value in request.query_params.multi_items():
        if name in params:
            if name not in repeated:
                repeated.append(name)
            continue
        params[name] = value

    for name in repeated:
        logger.warning(
            "request on %s received > 1 values for query parameter %s. "
            "extra values discarded.",
            request.url.path,
            name,
            extra={"path": request.url.path, "parameter": name},
        )
    return params


def type_name(tp: Any) -> str:
    """Readable name of a decode target for error messages."""
    if tp is Any:
        return "Any"
    return getattr(tp, "__name__", None) or repr(tp)


def _describe(exc: PydanticValidationError) -> str:
    problems = []
    for err in exc.errors(include_url=False):
        location = ".".join(str(part) for part in err["loc"])
        problems.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(problems)


async def decode_json_body(
    request: Request, request_type: Any, adapter: TypeAdapter | None = None
) -> Any:
    """Read the whole body and validate it as JSON into ``request_type``.

    Validation is strict: a JSON value of the wrong kind (``"30"`` or ``true``
    for an ``int``) is a mismatch, not a conversion. ``adapter`` is the
    prebuilt ``TypeAdapter`` for ``request_type``; one is built on the fly
    when omitted. Raises ``RequestDecodeError`` when the body is not
    valid JSON for ``request_type``, including when it is empty.
    """
    if adapter is None:
        adapter = TypeAdapter(request_type)
    body = await request.body()
    try:
        return adapter.validate_json(body, strict=True)
    except PydanticValidationError as exc:
        raise RequestDecodeError(type_name(request_type), _describe(exc)) from exc

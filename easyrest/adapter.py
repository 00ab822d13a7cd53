"""Handler adapter.

Turns a typed business function into a Starlette endpoint
(``async (Request) -> Response``) that can be registered on any Starlette or
FastAPI router::

    app.add_route("/new", handle_post(add_new_person), methods=["POST"])
    app.add_route("/list", handle_get(list_people), methods=["GET"])

The function receives the decoded input and returns its output, or raises.
A return value becomes ``{"status":"OK","response":...}``; an exception
becomes ``{"status":"ERROR","error":str(exc)}`` with status 500. When the
body cannot be decoded the function is never called.

Plain functions run in Starlette's threadpool, coroutine functions are
awaited. Endpoints hold no state besides the ``TypeAdapter`` built at
registration and can serve concurrent requests.
"""

from __future__ import annotations

import inspect
import logging
import typing
from typing import Any, Awaitable, Callable, TypeVar, Union

from pydantic import TypeAdapter
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response

from easyrest.decoders import decode_json_body, query_parameters, type_name
from easyrest.error_handler import RequestDecodeError
from easyrest.writer import write_error, write_response

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")

HandlerFunc = Callable[[RequestT], Union[ResponseT, Awaitable[ResponseT]]]
Endpoint = Callable[[Request], Awaitable[Response]]


def _handler_name(fn: Callable) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def _request_type(fn: Callable) -> Any:
    """Annotation of ``fn``'s first parameter, or ``Any`` when there is none.

    Raises ``TypeError`` when ``fn`` takes no argument or its annotations
    cannot be resolved.
    """
    try:
        hints = typing.get_type_hints(fn)
    except NameError as exc:
        raise TypeError(
            f"handler {_handler_name(fn)} has an unresolvable annotation: {exc}"
        ) from exc
    except TypeError:
        hints = {}
    try:
        parameters = list(inspect.signature(fn).parameters.values())
    except (TypeError, ValueError):
        return Any
    if not parameters:
        raise TypeError(f"handler {_handler_name(fn)} must accept one argument")
    return hints.get(parameters[0].name, Any)


async def _call(fn: Callable, argument: Any) -> Response:
    """Invoke ``fn`` and write its outcome."""
    try:
        if inspect.iscoroutinefunction(fn):
            result = await fn(argument)
        else:
            result = await run_in_threadpool(fn, argument)
    except Exception as exc:
        logger.warning(
            "handler %s failed: %s",
            _handler_name(fn),
            exc,
            extra={"handler": _handler_name(fn)},
        )
        return write_response(error=exc)
    return write_response(result)


def handle_get(fn: HandlerFunc[dict[str, str], Any]) -> Endpoint:
    """Adapt ``fn`` to read its input from the query string."""

    async def endpoint(request: Request) -> Response:
        return await _call(fn, query_parameters(request))

    endpoint.__name__ = getattr(fn, "__name__", endpoint.__name__)
    return endpoint


def handle_post(fn: HandlerFunc[Any, Any], request_type: Any = None) -> Endpoint:
    """Adapt ``fn`` to read its input from a JSON request body.

    ``request_type`` overrides the annotation of ``fn``'s first parameter.
    """
    return _handle_json_body(fn, request_type)


def handle_put(fn: HandlerFunc[Any, Any], request_type: Any = None) -> Endpoint:
    """Adapt ``fn`` to read its input from a JSON request body.

    ``request_type`` overrides the annotation of ``fn``'s first parameter.
    """
    return _handle_json_body(fn, request_type)


def _handle_json_body(fn: HandlerFunc[Any, Any], request_type: Any) -> Endpoint:
    target = request_type if request_type is not None else _request_type(fn)
    adapter: TypeAdapter = TypeAdapter(target)

    async def endpoint(request: Request) -> Response:
        try:
            argument = await decode_json_body(request, target, adapter)
        except RequestDecodeError as exc:
            logger.warning(
                "%s",
                exc.message,
                extra={"path": request.url.path, "target_type": type_name(target)},
            )
            return write_error(exc)
        return await _call(fn, argument)

    endpoint.__name__ = getattr(fn, "__name__", endpoint.__name__)
    return endpoint

"""Response envelope model.

Every response written by easyrest is wrapped in this envelope:
{ status: "OK", response: T } on success, { status: "ERROR", error: str } on
failure. Exactly one of ``response`` / ``error`` is present on the wire.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class EnvelopeStatus(str, Enum):
    """Outcome of a handled request."""

    OK = "OK"
    ERROR = "ERROR"


class Envelope(BaseModel):
    """JSON envelope for all responses."""

    # Keep NaN and infinity as floats in the dump so rendering rejects them
    model_config = ConfigDict(ser_json_inf_nan="constants")

    status: EnvelopeStatus
    response: Any = None
    error: str | None = None

    @model_validator(mode="after")
    def check_response_or_error(self) -> Envelope:
        if self.status is EnvelopeStatus.ERROR:
            if self.error is None or self.response is not None:
                raise ValueError("an ERROR envelope carries an error and no response")
        elif self.error is not None:
            raise ValueError("an OK envelope carries no error")
        return self

    @classmethod
    def success(cls, response: Any) -> Envelope:
        return cls(status=EnvelopeStatus.OK, response=response)

    @classmethod
    def failure(cls, error: str) -> Envelope:
        return cls(status=EnvelopeStatus.ERROR, error=error)

    def render(self) -> bytes:
        """Serialize to compact JSON, omitting the absent field.

        Models nested in the response are serialized by alias. Raises
        ``pydantic_core.PydanticSerializationError`` when the response payload
        has no JSON representation, and ``ValueError`` for NaN or infinite
        floats, which JSON cannot express.
        """
        if self.status is EnvelopeStatus.ERROR:
            fields = {"status", "error"}
        else:
            fields = {"status", "response"}
        content = self.model_dump(mode="json", include=fields, by_alias=True)
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")

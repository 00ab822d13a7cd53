"""Public models for easyrest."""

from easyrest.models.envelope import Envelope, EnvelopeStatus

__all__ = [
    "Envelope",
    "EnvelopeStatus",
]

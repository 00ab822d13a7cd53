"""Pydantic Settings for easyrest.

All environment variables use the EASYREST_ prefix.
Example: EASYREST_PORT=9000, EASYREST_DATABASE_PATH=/tmp/people.db
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class EasyRestSettings(BaseSettings):
    """easyrest configuration validated from environment variables."""

    # Server
    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True

    # Demo persistence
    database_path: str = "database.db"

    # Unserializable envelopes: terminate the process instead of answering 500
    abort_on_serialization_error: bool = False

    model_config = {"env_prefix": "EASYREST_"}

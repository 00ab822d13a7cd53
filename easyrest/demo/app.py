"""People demo application.

Routes are registered explicitly on the application's own router:

- POST /new: add a person (JSON body)
- GET /list: list everyone
"""

from __future__ import annotations

from fastapi import FastAPI

from easyrest.adapter import handle_get, handle_post
from easyrest.config.settings import EasyRestSettings
from easyrest.demo.handlers import PeopleHandlers
from easyrest.error_handler import register_error_handlers


def create_app(settings: EasyRestSettings | None = None) -> FastAPI:
    """Create the demo FastAPI application for ``settings``."""
    settings = settings or EasyRestSettings()
    people = PeopleHandlers(settings.database_path)

    app = FastAPI(title="easyrest people demo", version="1.0.0")

    register_error_handlers(
        app, abort_on_serialization_error=settings.abort_on_serialization_error
    )

    app.add_route("/new", handle_post(people.add_new_person), methods=["POST"])
    app.add_route("/list", handle_get(people.list_people), methods=["GET"])

    return app

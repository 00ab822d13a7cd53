"""Typed handler functions for the people demo.

These know nothing about HTTP: they take decoded input, return output and
raise on failure. ``easyrest.demo.app`` adapts them to endpoints.
"""

from __future__ import annotations

import logging
from datetime import datetime

from easyrest.demo import store
from easyrest.demo.models import NewPersonRequest, NewPersonResponse, Person

logger = logging.getLogger(__name__)


class InvalidPersonError(ValueError):
    """A new person is missing a name, an age or a favorite food."""


class PeopleHandlers:
    """Handlers bound to one SQLite database file."""

    def __init__(self, database_path: str) -> None:
        self.database_path = database_path

    def add_new_person(self, req: NewPersonRequest) -> NewPersonResponse:
        logger.info("handling /new request")

        if not req.name or req.age == 0 or not req.favorite_food:
            raise InvalidPersonError(
                f"the request was invalid. one or more values missing: {req!r}"
            )

        store.insert_person(self.database_path, req.name, req.age, req.favorite_food)

        return NewPersonResponse(
            message="your post was received",
            timestamp=datetime.now().astimezone().isoformat(timespec="seconds"),
        )

    def list_people(self, params: dict[str, str]) -> list[Person]:
        logger.info("handling /list request")
        return store.all_people(self.database_path)

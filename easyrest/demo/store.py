"""SQLite persistence for the people demo.

Every operation opens its own connection and closes it before returning, so
no connection outlives a single handler call.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing

from easyrest.demo.models import Person

logger = logging.getLogger(__name__)

_CREATE_PEOPLE = """
    create table if not exists people (
        id integer primary key autoincrement,
        name varchar,
        age integer,
        favorite_food varchar
    )
"""


class PersistenceError(Exception):
    """A statement against the people table failed."""


def open_database(path: str) -> sqlite3.Connection:
    return sqlite3.connect(path)


def migrate_database(path: str) -> None:
    """Create the ``people`` table if it does not exist."""
    try:
        with closing(open_database(path)) as db, db:
            db.execute(_CREATE_PEOPLE)
    except sqlite3.Error as exc:
        raise PersistenceError(f"failed to create table people: {exc}") from exc
    logger.info("people table ready in %s", path)


def insert_person(path: str, name: str, age: int, favorite_food: str) -> None:
    try:
        with closing(open_database(path)) as db, db:
            db.execute(
                "insert into people (name, age, favorite_food) values (?, ?, ?)",
                (name, age, favorite_food),
            )
    except sqlite3.Error as exc:
        raise PersistenceError(f"failed to insert row into people: {exc}") from exc


def all_people(path: str) -> list[Person]:
    try:
        with closing(open_database(path)) as db:
            rows = db.execute(
                "select name, age, favorite_food from people order by id"
            ).fetchall()
    except sqlite3.Error as exc:
        raise PersistenceError(
            f"failed to execute query on people table: {exc}"
        ) from exc
    return [
        Person(name=name, age=age, favorite_food=favorite_food)
        for name, age, favorite_food in rows
    ]

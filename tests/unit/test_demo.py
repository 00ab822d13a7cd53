"""Unit tests for the people demo: store, handlers, app and CLI."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from easyrest.config.settings import EasyRestSettings
from easyrest.demo import cli
from easyrest.demo.app import create_app
from easyrest.demo.handlers import InvalidPersonError, PeopleHandlers
from easyrest.demo.models import NewPersonRequest, Person
from easyrest.demo.store import (
    PersistenceError,
    all_people,
    insert_person,
    migrate_database,
)


def _row_count(path: str) -> int:
    db = sqlite3.connect(path)
    try:
        (count,) = db.execute("select count(*) from people").fetchone()
    finally:
        db.close()
    return count


@pytest.fixture
def client(settings: EasyRestSettings) -> TestClient:
    return TestClient(create_app(settings), raise_server_exceptions=False)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class TestStore:
    def test_migrate_is_idempotent(self, database_path: str):
        migrate_database(database_path)
        assert _row_count(database_path) == 0

    def test_insert_then_list(self, database_path: str):
        insert_person(database_path, "Ann", 30, "soup")
        insert_person(database_path, "Bo", 41, "rice")

        assert all_people(database_path) == [
            Person(name="Ann", age=30, favorite_food="soup"),
            Person(name="Bo", age=41, favorite_food="rice"),
        ]

    def test_insert_without_table(self, tmp_path: Path):
        with pytest.raises(PersistenceError, match="failed to insert row into people"):
            insert_person(str(tmp_path / "empty.db"), "Ann", 30, "soup")

    def test_list_without_table(self, tmp_path: Path):
        with pytest.raises(PersistenceError, match="failed to execute query on people table"):
            all_people(str(tmp_path / "empty.db"))


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


class TestPeopleHandlers:
    def test_add_new_person(self, database_path: str):
        handlers = PeopleHandlers(database_path)
        resp = handlers.add_new_person(
            NewPersonRequest(name="Ann", age=30, favorite_food="soup")
        )

        assert resp.message == "your post was received"
        assert datetime.fromisoformat(resp.timestamp).tzinfo is not None
        assert _row_count(database_path) == 1

    @pytest.mark.parametrize(
        "req",
        [
            NewPersonRequest(name="", age=30, favorite_food="soup"),
            NewPersonRequest(name="Ann", age=0, favorite_food="soup"),
            NewPersonRequest(name="Ann", age=30, favorite_food=""),
        ],
    )
    def test_missing_values_rejected_before_insert(self, database_path: str, req):
        handlers = PeopleHandlers(database_path)

        with pytest.raises(InvalidPersonError, match="one or more values missing"):
            handlers.add_new_person(req)
        assert _row_count(database_path) == 0

    def test_list_people_ignores_params(self, database_path: str):
        insert_person(database_path, "Ann", 30, "soup")
        people = PeopleHandlers(database_path).list_people({"page": "2"})
        assert [p.name for p in people] == ["Ann"]


# ---------------------------------------------------------------------------
# HTTP app
# ---------------------------------------------------------------------------


class TestPeopleApp:
    def test_post_valid_person(self, client: TestClient, database_path: str):
        resp = client.post("/new", json={"name": "Ann", "age": 30, "favoriteFood": "soup"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "OK"
        assert set(body) == {"status", "response"}
        assert body["response"]["message"] == "your post was received"
        datetime.fromisoformat(body["response"]["timestamp"])
        assert _row_count(database_path) == 1

    def test_post_missing_name(self, client: TestClient, database_path: str):
        resp = client.post("/new", json={"name": "", "age": 30, "favoriteFood": "soup"})

        assert resp.status_code == 500
        body = resp.json()
        assert body["status"] == "ERROR"
        assert set(body) == {"status", "error"}
        assert "one or more values missing" in body["error"]
        assert _row_count(database_path) == 0

    def test_post_malformed_body(self, client: TestClient, database_path: str):
        resp = client.post("/new", content=b'{"name": "Ann",')

        assert resp.status_code == 500
        assert resp.json()["error"].startswith(
            "unable to parse request as type NewPersonRequest: "
        )
        assert _row_count(database_path) == 0

    def test_list_people(self, client: TestClient):
        client.post("/new", json={"name": "Ann", "age": 30, "favoriteFood": "soup"})
        client.post("/new", json={"name": "Bo", "age": 41, "favoriteFood": "rice"})

        resp = client.get("/list")

        assert resp.status_code == 200
        assert resp.json() == {
            "status": "OK",
            "response": [
                {"name": "Ann", "age": 30, "favoriteFood": "soup"},
                {"name": "Bo", "age": 41, "favoriteFood": "rice"},
            ],
        }

    def test_list_without_migration(self, tmp_path: Path):
        settings = EasyRestSettings(database_path=str(tmp_path / "fresh.db"))
        client = TestClient(create_app(settings))

        resp = client.get("/list")

        assert resp.status_code == 500
        assert resp.json()["error"].startswith("failed to execute query on people table")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestCli:
    @pytest.fixture(autouse=True)
    def _quiet_logging(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cli, "configure_logging", lambda *a, **kw: None)

    def test_migrate(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = str(tmp_path / "cli.db")
        monkeypatch.setenv("EASYREST_DATABASE_PATH", path)

        result = CliRunner().invoke(cli.main, ["--migrate"])

        assert result.exit_code == 0, result.output
        assert _row_count(path) == 0

    def test_server_runs_uvicorn_after_migration(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        path = str(tmp_path / "cli.db")
        monkeypatch.setenv("EASYREST_DATABASE_PATH", path)
        monkeypatch.setenv("EASYREST_PORT", "8123")
        runs: list[dict] = []
        monkeypatch.setattr(
            cli.uvicorn, "run", lambda app, **kwargs: runs.append(kwargs)
        )

        result = CliRunner().invoke(cli.main, ["--migrate", "--server"])

        assert result.exit_code == 0, result.output
        assert _row_count(path) == 0
        assert runs == [{"host": "127.0.0.1", "port": 8123, "log_config": None}]

    def test_no_flags_does_nothing(self, monkeypatch: pytest.MonkeyPatch):
        runs: list = []
        monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **kw: runs.append(a))

        result = CliRunner().invoke(cli.main, [])

        assert result.exit_code == 0
        assert runs == []

    def test_migration_failure_exits_nonzero(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("EASYREST_DATABASE_PATH", str(tmp_path / "missing" / "x.db"))

        result = CliRunner().invoke(cli.main, ["--migrate"])

        assert result.exit_code == 1
        assert "failed to create table people" in result.output

"""Pydantic models exchanged by the people demo endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Person(BaseModel):
    """A row of the ``people`` table."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    age: int
    favorite_food: str = Field(alias="favoriteFood")


class NewPersonRequest(BaseModel):
    """Body of ``POST /new``. Missing fields decode to their zero value."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    age: int = 0
    favorite_food: str = Field(default="", alias="favoriteFood")


class NewPersonResponse(BaseModel):
    message: str
    timestamp: str  # RFC 3339

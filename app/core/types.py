"""
Lookup result type for single-entity queries.

A lookup either finds the entity (``Found(value)``) or it does not
(``ABSENT``). Aggregate queries never use this type; they return plain,
possibly empty, containers.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


class Absent:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "ABSENT"

    def __bool__(self):
        return False


ABSENT = Absent()

Lookup = Union[Found[T], Absent]

import itertools
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def new_id(self) -> str: ...


class UuidIdGenerator:
    """Random UUID4 identifiers, the default for medications and dose logs."""

    def new_id(self) -> str:
        return str(uuid.uuid4())


class CounterIdGenerator:
    """Deterministic ids ('<prefix>1', '<prefix>2', ...) for tests and seeding."""

    def __init__(self, prefix: str = "", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def new_id(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


def get_id_generator() -> IdGenerator:
    return UuidIdGenerator()

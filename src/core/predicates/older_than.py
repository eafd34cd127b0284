"""Age threshold predicate usable against any record exposing ``age()``."""
from __future__ import annotations

from typing import Callable, Iterable, Protocol, TypeVar, Union, runtime_checkable

Number = Union[int, float]
T = TypeVar("T")


@runtime_checkable
class HasAge(Protocol):
    def age(self) -> Number: ...


class OlderThan:
    """Callable returning True when ``obj.age()`` is strictly above ``limit``.

    Works for people, cars, projects or anything else with an ``age()``
    accessor; no common base class is needed.
    """

    __slots__ = ("limit",)

    def __init__(self, limit: Number) -> None:
        self.limit = limit

    def __call__(self, obj: HasAge) -> bool:
        return obj.age() > self.limit

    def __repr__(self) -> str:
        return f"OlderThan({self.limit!r})"


def count_matching(items: Iterable[T], predicate: Callable[[T], bool]) -> int:
    return sum(1 for item in items if predicate(item))

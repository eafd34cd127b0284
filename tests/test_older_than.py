from __future__ import annotations

from dataclasses import dataclass

from core.predicates import HasAge, OlderThan, count_matching


@dataclass
class Person:
    name: str
    years: int

    def age(self) -> int:
        return self.years


class Car:
    def __init__(self, built: int, now: int = 2024) -> None:
        self.built = built
        self.now = now

    def age(self) -> int:
        return self.now - self.built


def test_strictly_greater_than_limit() -> None:
    predicate = OlderThan(5)
    assert predicate(Person("a", 6))
    assert not predicate(Person("b", 5))
    assert not predicate(Person("c", 4))


def test_works_across_unrelated_record_types() -> None:
    predicate = OlderThan(5)
    people = [Person("a", 3), Person("b", 40), Person("c", 6)]
    cars = [Car(2023), Car(2010)]
    assert count_matching(people, predicate) == 2
    assert count_matching(cars, predicate) == 1
    assert count_matching([], predicate) == 0


def test_records_satisfy_capability_protocol() -> None:
    assert isinstance(Person("a", 1), HasAge)
    assert isinstance(Car(2000), HasAge)
    assert not isinstance(object(), HasAge)


def test_float_ages_and_repr() -> None:
    predicate = OlderThan(2.5)
    assert predicate(Person("a", 3))
    assert repr(predicate) == "OlderThan(2.5)"

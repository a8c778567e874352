import pytest
from helpers import cls, graph, method, ref, returns
from returns.result import Failure, Success

from pullup.analysis.conflicts import ConflictChecker, ConflictOutcome
from pullup.errors import OverloadAmbiguity, SignatureConflict
from pullup.hierarchy.types import TypeSystem
from pullup.model.body import Literal
from pullup.model.graph import ClassGraph


@pytest.fixture
def checker(zoo: ClassGraph) -> ConflictChecker:
    return ConflictChecker(TypeSystem(zoo))


def test_no_same_named_method_is_clear(zoo: ClassGraph, checker: ConflictChecker) -> None:
    bark = zoo.get("zoo.Dog").methods[0]
    check = checker.check(bark, zoo.get("zoo.Animal"))
    assert check.outcome is ConflictOutcome.CLEAR
    assert not check.is_fatal


def test_identical_body_is_a_duplicate(zoo: ClassGraph, checker: ConflictChecker) -> None:
    animal = zoo.get("zoo.Animal")
    existing = animal.add_method(method("bark", returns="String", body=[returns(ref("name"))]))
    check = checker.check(zoo.get("zoo.Dog").methods[0], animal)
    assert check.outcome is ConflictOutcome.DUPLICATE
    assert check.existing is existing
    assert isinstance(checker.gate(zoo.get("zoo.Dog").methods[0], animal), Success)


def test_different_body_is_a_signature_conflict(zoo: ClassGraph, checker: ConflictChecker) -> None:
    animal = zoo.get("zoo.Animal")
    animal.add_method(method("bark", returns="String", body=[returns(Literal('"woof"'))]))
    result = checker.gate(zoo.get("zoo.Dog").methods[0], animal)
    assert isinstance(result, Failure)
    assert isinstance(result.failure(), SignatureConflict)


def test_abstract_declaration_conflicts_with_a_concrete_method(
    zoo: ClassGraph, checker: ConflictChecker
) -> None:
    animal = zoo.get("zoo.Animal")
    animal.add_method(method("bark", returns="String", abstract=True))
    check = checker.check(zoo.get("zoo.Dog").methods[0], animal)
    assert check.outcome is ConflictOutcome.SIGNATURE_CONFLICT


def test_related_parameter_types_make_overloads_ambiguous(
    zoo: ClassGraph, checker: ConflictChecker
) -> None:
    animal = zoo.get("zoo.Animal")
    animal.add_method(method("feed", [("who", "zoo.Animal")]))
    dog = zoo.get("zoo.Dog")
    moving = dog.add_method(method("feed", [("who", "Dog")]))

    result = checker.gate(moving, animal)
    assert isinstance(result, Failure)
    assert isinstance(result.failure(), OverloadAmbiguity)


def test_unrelated_overloads_are_clear(zoo: ClassGraph, checker: ConflictChecker) -> None:
    animal = zoo.get("zoo.Animal")
    animal.add_method(method("feed", [("grams", "int")]))
    moving = zoo.get("zoo.Dog").add_method(method("feed", [("who", "Dog")]))
    assert checker.check(moving, animal).outcome is ConflictOutcome.CLEAR
    other_arity = zoo.get("zoo.Cat").add_method(method("feed", [("a", "int"), ("b", "int")]))
    assert checker.check(other_arity, animal).outcome is ConflictOutcome.CLEAR


def test_signatures_compare_canonical_parameter_types() -> None:
    g = graph(cls("k.A", None, method("take", [("a", "k.A")])), cls("k.B", "k.A", method("take", [("a", "A")])))
    checker = ConflictChecker(TypeSystem(g))
    assert checker.find_same_signature(g.get("k.B").methods[0], g.get("k.A")) is g.get("k.A").methods[0]

import pytest
from helpers import cls, graph

from pullup.adjust.types import TypeUnifier
from pullup.hierarchy.types import TypeSystem
from pullup.model.graph import ClassGraph


@pytest.fixture
def unifier(zoo: ClassGraph) -> TypeUnifier:
    zoo.add(cls("zoo.Bowl"))
    return TypeUnifier(TypeSystem(zoo))


def test_ancestor_absorbs_descendant(unifier: TypeUnifier) -> None:
    result = unifier.unify("zoo.Animal", ["zoo.Dog"])
    assert result.type_name == "zoo.Animal"
    assert not result.changed
    assert unifier.unify("zoo.Animal", ["zoo.Puppy", "zoo.Cat"]).type_name == "zoo.Animal"


def test_descendant_widens_to_ancestor(unifier: TypeUnifier) -> None:
    result = unifier.unify("zoo.Puppy", ["zoo.Dog"])
    assert result.type_name == "zoo.Dog"
    assert result.changed
    assert not result.fell_back_to_top


def test_siblings_meet_at_their_nearest_common_ancestor(unifier: TypeUnifier) -> None:
    assert unifier.unify("zoo.Puppy", ["zoo.Cat"]).type_name == "zoo.Animal"


def test_unrelated_types_fall_back_to_the_top(unifier: TypeUnifier) -> None:
    result = unifier.unify("zoo.Dog", ["zoo.Bowl"])
    assert result.type_name == "Object"
    assert result.fell_back_to_top


def test_same_types_and_aliases_are_left_alone(unifier: TypeUnifier) -> None:
    assert unifier.unify("Dog", ["zoo.Dog"]).type_name == "Dog"
    result = unifier.unify("Object", ["java.lang.Object", "zoo.Dog"])
    assert result.type_name == "Object"
    assert not result.fell_back_to_top


def test_primitive_and_reference_types_never_unify(unifier: TypeUnifier) -> None:
    result = unifier.unify("int", ["zoo.Dog", "int"])
    assert result.type_name == "int"
    assert result.incompatible == ("zoo.Dog",)


def test_library_types_unify_through_known_supertypes() -> None:
    unifier = TypeUnifier(TypeSystem(graph()))
    assert unifier.unify("Integer", ["Long"]).type_name == "Number"
    assert unifier.unify("String", ["Integer"]).type_name == "Object"

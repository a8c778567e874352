import pytest
from helpers import cls, graph

from pullup.hierarchy.types import TypeSystem, erasure, is_primitive, is_reference, type_arguments
from pullup.model.graph import ClassGraph


@pytest.fixture
def types(zoo: ClassGraph) -> TypeSystem:
    zoo.external_types.add("Leash")
    return TypeSystem(zoo)


def test_type_name_helpers() -> None:
    assert is_primitive("int") and not is_primitive("Integer")
    assert not is_reference("void") and is_reference("String")
    assert erasure("Map<String, List<Integer>>") == "Map"
    assert type_arguments("Map<String, List<Integer>>") == ["String", "List<Integer>"]
    assert type_arguments("String") == []


def test_canonical_maps_simple_names_and_top_aliases(types: TypeSystem) -> None:
    assert types.canonical("Dog") == "zoo.Dog"
    assert types.canonical("java.lang.Object") == "Object"
    assert types.same_type("Dog", "zoo.Dog")
    assert types.canonical("java.lang.String") == "String"
    assert types.same_type("java.util.List", "List")
    assert types.is_resolvable("java.lang.Integer")
    assert types.is_subtype("java.lang.Integer", "Number")


def test_subtyping_follows_the_class_chain(types: TypeSystem) -> None:
    assert types.is_subtype("Puppy", "zoo.Animal")
    assert types.is_subtype("Dog", "Dog")
    assert not types.is_subtype("Animal", "Dog")
    assert not types.is_subtype("Cat", "Dog")
    assert types.is_subtype("Cat", "java.lang.Object")
    assert types.related("Puppy", "Animal")


def test_primitives_are_only_subtypes_of_themselves(types: TypeSystem) -> None:
    assert types.is_subtype("int", "int")
    assert not types.is_subtype("int", "long")
    assert not types.is_subtype("int", "Object")


def test_supertypes_continue_into_known_library_types() -> None:
    g = graph(cls("n.Counter", "Integer"))
    types = TypeSystem(g)
    assert types.supertypes_of("n.Counter") == ["Integer", "Number"]
    assert types.is_subtype("Counter", "Number")
    assert types.supertypes_of("int") == []


def test_is_resolvable(types: TypeSystem) -> None:
    for name in ("int", "void", "Object", "String", "Dog", "zoo.Cat", "Leash", "List<Dog>", "Dog[]"):
        assert types.is_resolvable(name), name
    for name in ("Wolf", "List<Wolf>", "Wolf[]"):
        assert not types.is_resolvable(name), name

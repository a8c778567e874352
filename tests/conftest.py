import pytest
from helpers import cls, field, graph, method, ref, returns

from pullup.model.graph import ClassGraph
from pullup.model.nodes import Visibility


@pytest.fixture
def zoo() -> ClassGraph:
    """Animal <- Dog <- Puppy, Animal <- Cat, all in package `zoo`."""
    return graph(
        cls("zoo.Animal", None, field("name", "String", Visibility.PROTECTED)),
        cls(
            "zoo.Dog",
            "zoo.Animal",
            field("tricks", "int"),
            method("bark", returns="String", body=[returns(ref("name"))]),
        ),
        cls("zoo.Puppy", "zoo.Dog"),
        cls("zoo.Cat", "zoo.Animal"),
    )


@pytest.fixture
def chain() -> ClassGraph:
    """C1 <- C2 <- C3; C1 holds the state C3 reads."""
    return graph(
        cls("chain.C1", None, field("x", "int", Visibility.PROTECTED)),
        cls("chain.C2", "chain.C1", method("helper", returns="int", body=[returns(ref("x"))])),
        cls("chain.C3", "chain.C2", method("m", returns="int", body=[returns(ref("x"))])),
    )

import pytest
from helpers import call, cls, does, graph, method, ref, returns

from pullup.analysis.resolution import MemberResolver
from pullup.common.rendering import render_block
from pullup.migration.rewriter import CallSiteRewriter, forwarding_call
from pullup.model.body import Binary, Cast, Comment, If, Literal, Super, This
from pullup.model.graph import ClassGraph


@pytest.fixture
def vet() -> ClassGraph:
    return graph(
        cls("zoo.Animal", None, method("greet"), method("weight", returns="int", body=[returns(Literal("1"))])),
        cls("zoo.Dog", "zoo.Animal"),
        cls(
            "zoo.Vet",
            None,
            method("treat", [("patient", "zoo.Dog")]),
            method("admit", [("patient", "zoo.Animal")]),
        ),
    )


def test_self_arguments_needing_the_origin_are_downcast(vet: ClassGraph) -> None:
    dog, animal = vet.get("zoo.Dog"), vet.get("zoo.Animal")
    visit = dog.add_method(
        method(
            "visit",
            [("doctor", "zoo.Vet")],
            body=[
                does(call("treat", This(), target=ref("doctor"))),
                does(call("admit", This(), target=ref("doctor"))),
            ],
        )
    )
    rewriter = CallSiteRewriter(MemberResolver(vet))

    scan = rewriter.scan(visit, dog)
    assert [site.expected for site in scan.self_arguments] == ["zoo.Dog", "zoo.Animal"]
    assert rewriter.downcast_self_arguments(scan, dog, animal) == 1
    assert visit.body[0].expr.args == [Cast("zoo.Dog", This())]
    assert visit.body[1].expr.args == [This()]
    assert render_block(visit.body[:1]) == "doctor.treat(((zoo.Dog) this));"


def test_super_calls_are_located_at_statement_level_or_nested(vet: ClassGraph) -> None:
    dog, animal = vet.get("zoo.Dog"), vet.get("zoo.Animal")
    greet, weight = animal.methods
    speak = dog.add_method(
        method(
            "speak",
            returns="int",
            body=[
                If(Literal("true"), then=[does(call("greet", target=Super()))]),
                returns(Binary("+", call("weight", target=Super()), Literal("1"))),
            ],
        )
    )
    rewriter = CallSiteRewriter(MemberResolver(vet))
    scan = rewriter.scan(speak, dog)

    greets = rewriter.super_calls_to(scan, greet)
    weights = rewriter.super_calls_to(scan, weight)
    assert len(greets) == 1 and greets[0].is_statement
    assert len(weights) == 1 and not weights[0].is_statement

    removed, nested = rewriter.remove_super_calls(greets + weights, "gone")
    assert (removed, nested) == (1, 1)
    assert speak.body[0].then == [Comment("gone")]
    assert speak.body[1].value.left.target == Super()


def test_forwarding_call_passes_parameters_through() -> None:
    target = method("resize", [("w", "int"), ("h", "int")])
    assert render_block([does(forwarding_call(target))]) == "super.resize(w, h);"

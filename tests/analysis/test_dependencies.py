import pytest
from helpers import call, cls, does, field, graph, method, ref, returns

from pullup.analysis.dependencies import DependencyAnalyzer, DependencyKind
from pullup.analysis.resolution import MemberResolver
from pullup.model.body import Binary, FieldAccess, LocalVar, This
from pullup.model.graph import ClassGraph
from pullup.model.nodes import Visibility


@pytest.fixture
def shop() -> ClassGraph:
    """Store <- Outlet <- Kiosk; `sell` in Kiosk touches every level."""
    sell_body = [
        LocalVar("int", "stock", ref("shelf")),
        does(call("restock", ref("stock"))),
        does(call("audit")),
        does(call("log", FieldAccess(This(), "till"))),
        returns(Binary("+", ref("stock"), ref("margin"))),
    ]
    return graph(
        cls("shop.Store", None, field("margin", "int", Visibility.PROTECTED), method("log", [("n", "int")])),
        cls(
            "shop.Outlet",
            "shop.Store",
            field("till", "int", Visibility.PROTECTED),
            method("audit", body=[does(call("restock", ref("till")))]),
        ),
        cls(
            "shop.Kiosk",
            "shop.Outlet",
            field("shelf", "int"),
            method("restock", [("amount", "int")], visibility=Visibility.PRIVATE),
            method("sell", returns="int", body=sell_body),
        ),
    )


def test_findings_are_classified_by_where_the_member_lives(shop: ClassGraph) -> None:
    analyzer = DependencyAnalyzer(MemberResolver(shop))
    store, kiosk = shop.get("shop.Store"), shop.get("shop.Kiosk")
    sell = kiosk.methods[1]

    report = analyzer.analyze_method(sell, kiosk, store)
    kinds = {finding.member.describe(): finding.kind for finding in report.findings}

    assert kinds == {
        "shop.Kiosk.shelf": DependencyKind.ORIGIN,
        "shop.Kiosk.restock(int)": DependencyKind.ORIGIN,
        "shop.Outlet.audit()": DependencyKind.INTERMEDIATE,
        "shop.Outlet.till": DependencyKind.INTERMEDIATE,
        "shop.Store.log(int)": DependencyKind.IRRELEVANT,
        "shop.Store.margin": DependencyKind.IRRELEVANT,
    }
    assert [f.name for f in report.fields] == ["shelf", "till"]
    assert [m.name for m in report.methods] == ["restock", "audit"]
    assert sell not in report


def test_private_relevant_members_carry_an_issue(shop: ClassGraph) -> None:
    analyzer = DependencyAnalyzer(MemberResolver(shop))
    kiosk = shop.get("shop.Kiosk")
    report = analyzer.analyze_method(kiosk.methods[1], kiosk, shop.get("shop.Store"))
    assert report.issues == [
        "shop.Kiosk.shelf is private and will be widened",
        "shop.Kiosk.restock(int) is private and will be widened",
    ]


def test_locals_are_not_dependencies(shop: ClassGraph) -> None:
    analyzer = DependencyAnalyzer(MemberResolver(shop))
    kiosk = shop.get("shop.Kiosk")
    probe = method("probe", [("shelf", "int")], body=[returns(ref("shelf"))])
    kiosk.add_method(probe)
    assert analyzer.analyze_method(probe, kiosk, shop.get("shop.Outlet")).findings == []


def test_intermediate_bodies_resolve_in_their_own_class(shop: ClassGraph) -> None:
    analyzer = DependencyAnalyzer(MemberResolver(shop))
    kiosk, outlet, store = shop.get("shop.Kiosk"), shop.get("shop.Outlet"), shop.get("shop.Store")
    audit = outlet.methods[0]

    # Outlet cannot see Kiosk.restock, so nothing in audit's body resolves to it.
    report = analyzer.analyze_method(audit, kiosk, store)
    assert [f.member.describe() for f in report.findings] == ["shop.Outlet.till"]


def test_field_initializers_are_analyzed(shop: ClassGraph) -> None:
    analyzer = DependencyAnalyzer(MemberResolver(shop))
    kiosk = shop.get("shop.Kiosk")
    derived = field("derived", "int", initializer=Binary("*", ref("shelf"), ref("margin")))
    kiosk.add_field(derived)

    report = analyzer.analyze_field(derived, kiosk, shop.get("shop.Store"))
    assert report.fields == [kiosk.fields[0]]
    assert analyzer.analyze_field(kiosk.fields[0], kiosk, shop.get("shop.Store")).findings == []

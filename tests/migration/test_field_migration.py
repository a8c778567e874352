from helpers import cls, field, graph
from returns.result import Failure, Success

from pullup.errors import SignatureConflict, UnresolvableType
from pullup.migration.methods import MethodMigrator
from pullup.model.graph import ClassGraph
from pullup.model.nodes import Visibility
from pullup.report import MigrationReport


def test_private_field_moves_widened_to_protected(chain: ClassGraph) -> None:
    migrator = MethodMigrator(chain)
    c1, c3 = chain.get("chain.C1"), chain.get("chain.C3")
    secret = c3.add_field(field("secret", "String"))
    report = MigrationReport()

    moved = migrator.fields.migrate(secret, c3, c1, report)

    assert isinstance(moved, Success)
    promoted = moved.unwrap()
    assert promoted.owner == "chain.C1"
    assert promoted.visibility is Visibility.PROTECTED
    assert c3.find_field("secret") is None
    assert report.touched_names == ["chain.C1", "chain.C3"]
    assert report.moved_fields == [promoted]


def test_shadowing_copies_on_the_path_are_removed(chain: ClassGraph) -> None:
    migrator = MethodMigrator(chain)
    c1, c2, c3 = (chain.get(f"chain.C{i}") for i in (1, 2, 3))
    mine = c3.add_field(field("cache", "String"))
    c2.add_field(field("cache", "String"))

    migrator.fields.migrate(mine, c3, c1, MigrationReport())

    assert c2.find_field("cache") is None
    assert c1.find_field("cache") is not None


def test_field_type_unifies_with_same_named_fields_below() -> None:
    g = graph(
        cls("p.Pet"),
        cls("p.Dog", "p.Pet"),
        cls("p.Cat", "p.Pet"),
        cls("p.Home"),
        cls("p.Kennel", "p.Home", field("resident", "p.Dog")),
        cls("p.Cattery", "p.Home", field("resident", "p.Cat")),
    )
    migrator = MethodMigrator(g)
    kennel, home = g.get("p.Kennel"), g.get("p.Home")

    promoted = migrator.fields.migrate(kennel.fields[0], kennel, home, MigrationReport()).unwrap()

    assert promoted.type_name == "p.Pet"


def test_existing_field_on_the_destination_blocks_the_move(chain: ClassGraph) -> None:
    migrator = MethodMigrator(chain)
    c1, c3 = chain.get("chain.C1"), chain.get("chain.C3")
    clash = c3.add_field(field("x", "int"))
    result = migrator.fields.migrate(clash, c3, c1, MigrationReport())
    assert isinstance(result, Failure)
    assert isinstance(result.failure(), SignatureConflict)
    assert c3.find_field("x") is clash


def test_unresolvable_field_type_blocks_the_move(chain: ClassGraph) -> None:
    migrator = MethodMigrator(chain)
    c1, c3 = chain.get("chain.C1"), chain.get("chain.C3")
    odd = c3.add_field(field("odd", "com.vendor.Gizmo"))
    result = migrator.fields.migrate(odd, c3, c1, MigrationReport())
    assert isinstance(result, Failure)
    assert isinstance(result.failure(), UnresolvableType)

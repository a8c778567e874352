import json
from pathlib import Path

import pytest

from pullup.models import RefactoringOptions
from pullup.orchestrator import RefactoringOrchestrator
from pullup.snapshot import SnapshotStore
from pullup.store.documents import ClassDocumentStore


@pytest.fixture
def project(tmp_path: Path) -> Path:
    docs = {
        "Animal.class.json": {"classes": [{"name": "zoo.Animal"}]},
        "Dog.class.json": {
            "classes": [
                {
                    "name": "zoo.Dog",
                    "extends": "zoo.Animal",
                    "fields": [{"name": "tricks", "type": "int", "visibility": "private"}],
                    "methods": [
                        {
                            "name": "count",
                            "returns": "int",
                            "visibility": "public",
                            "body": [{"kind": "return", "value": {"kind": "name", "identifier": "tricks"}}],
                        }
                    ],
                }
            ]
        },
        "Cat.class.json": {"classes": [{"name": "zoo.Cat", "extends": "zoo.Animal"}]},
    }
    for name, data in docs.items():
        (tmp_path / name).write_text(json.dumps(data), encoding="utf-8")
    return tmp_path


def _text(project: Path, name: str) -> str:
    return (project / name).read_text(encoding="utf-8")


def test_run_writes_only_touched_documents_and_snapshots_them(project: Path) -> None:
    cat_before = _text(project, "Cat.class.json")
    dog_before = _text(project, "Dog.class.json")

    result = RefactoringOrchestrator().run([project], "Dog", "count")

    assert result.success, result.message
    assert sorted(Path(p).name for p in result.modified_files) == ["Animal.class.json", "Dog.class.json"]
    assert _text(project, "Cat.class.json") == cat_before

    graph = ClassDocumentStore([project]).load().unwrap()
    assert graph.get("zoo.Animal").find_method(("count", ())) is not None
    assert graph.get("zoo.Animal").find_field("tricks") is not None
    assert graph.get("zoo.Dog").methods == []

    snapshot = SnapshotStore.for_roots([project])
    assert snapshot.exists()
    restored = RefactoringOrchestrator().restore([project])
    assert len(restored.unwrap()) == 2
    assert _text(project, "Dog.class.json") == dog_before


def test_dry_run_reports_without_writing(project: Path) -> None:
    before = {p.name: p.read_text(encoding="utf-8") for p in project.glob("*.class.json")}

    result = RefactoringOrchestrator(RefactoringOptions(dry_run=True)).run([project], "zoo.Dog", "count")

    assert result.success
    assert result.message.startswith("Dry run: ")
    assert len(result.modified_files) == 2
    assert {p.name: p.read_text(encoding="utf-8") for p in project.glob("*.class.json")} == before
    assert not SnapshotStore.for_roots([project]).exists()


def test_run_can_skip_the_snapshot(project: Path) -> None:
    result = RefactoringOrchestrator(RefactoringOptions(snapshot=False)).run(
        [project], "zoo.Dog", "tricks", field=True
    )
    assert result.success
    assert not SnapshotStore.for_roots([project]).exists()


def test_run_failures_leave_documents_alone(project: Path) -> None:
    before = _text(project, "Dog.class.json")
    result = RefactoringOrchestrator().run([project], "zoo.Dog", "count", "zoo.Cat")
    assert not result.success
    assert result.modified_files == []
    assert _text(project, "Dog.class.json") == before


def test_run_reports_unreadable_documents(project: Path) -> None:
    (project / "Bad.class.json").write_text("not json", encoding="utf-8")
    result = RefactoringOrchestrator().run([project], "zoo.Dog", "count")
    assert not result.success
    assert "Bad.class.json" in result.message

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from returns.result import Failure, Success
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.rule import Rule

from . import ui
from .app import config
from .hierarchy.navigator import HierarchyNavigator
from .model.graph import ClassGraph
from .model.nodes import ClassNode
from .models import RefactoringOptions
from .orchestrator import RefactoringOrchestrator
from .store.documents import ClassDocumentStore

app = typer.Typer(help="Pull methods and fields up a class hierarchy without breaking it.")

RootsOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--root",
        "-r",
        help="Source root holding *.class.json documents. Repeatable.",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
]
DestinationOption = Annotated[
    str | None,
    typer.Option("--to", help="Ancestor to move to. Defaults to the direct supertype."),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Log every step.")]
DryRunOption = Annotated[
    bool, typer.Option("--dry-run", help="Report what would change without writing.")
]
SnapshotOption = Annotated[
    bool, typer.Option("--snapshot/--no-snapshot", help="Snapshot files before writing.")
]


def _setup_environment(verbose: bool) -> Console:
    """Routes logging through Rich and returns the console to print to."""
    console = Console()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format=config.LOG_FORMAT,
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )
    return console


def _roots(roots: list[Path] | None) -> list[Path]:
    return roots or [config.DEFAULT_WORKING_DIR.resolve()]


def _load_graph(console: Console, roots: list[Path]) -> ClassGraph:
    match ClassDocumentStore(roots).load():
        case Success(graph):
            return graph
        case Failure(error):
            console.print(
                Panel(f"[bold red]Failed to load classes:[/bold red]\n{error}", border_style="red")
            )
    raise typer.Exit(code=1)


def _find_class(console: Console, graph: ClassGraph, name: str) -> ClassNode:
    match graph.find(name):
        case Success(node):
            return node
        case Failure(error):
            console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(code=1)


@app.command("pull-up")
def pull_up(
    origin: Annotated[str, typer.Argument(help="Class declaring the method.")],
    method: Annotated[str, typer.Argument(help="Name of the method to pull up.")],
    destination: DestinationOption = None,
    param: Annotated[
        list[str] | None,
        typer.Option("--param", "-p", help="Parameter type, in order, to pick an overload."),
    ] = None,
    roots: RootsOption = None,
    dry_run: DryRunOption = False,
    snapshot: SnapshotOption = True,
    stubs: Annotated[
        bool, typer.Option("--stubs/--no-stubs", help="Synthesize stubs in concrete descendants.")
    ] = True,
    verbose: VerboseOption = False,
) -> None:
    """Move a method, and what it depends on, up to an ancestor."""
    console = _setup_environment(verbose)
    console.print(Rule(f"[bold magenta]Pull up {origin}.{method}[/bold magenta]"))
    options = RefactoringOptions(dry_run=dry_run, snapshot=snapshot, synthesize_stubs=stubs)
    result = RefactoringOrchestrator(options).run(
        _roots(roots), origin, method, destination, parameter_types=param
    )
    ui.display_result(console, result)
    if not result.success:
        raise typer.Exit(code=1)


@app.command("pull-up-field")
def pull_up_field(
    origin: Annotated[str, typer.Argument(help="Class declaring the field.")],
    field: Annotated[str, typer.Argument(help="Name of the field to pull up.")],
    destination: DestinationOption = None,
    roots: RootsOption = None,
    dry_run: DryRunOption = False,
    snapshot: SnapshotOption = True,
    verbose: VerboseOption = False,
) -> None:
    """Move a field up to an ancestor, removing shadowing copies on the way."""
    console = _setup_environment(verbose)
    console.print(Rule(f"[bold magenta]Pull up field {origin}.{field}[/bold magenta]"))
    options = RefactoringOptions(dry_run=dry_run, snapshot=snapshot)
    result = RefactoringOrchestrator(options).run(
        _roots(roots), origin, field, destination, field=True
    )
    ui.display_result(console, result)
    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def classes(roots: RootsOption = None, verbose: VerboseOption = False) -> None:
    """List every loaded class."""
    console = _setup_environment(verbose)
    ui.display_classes(console, _load_graph(console, _roots(roots)))


@app.command()
def methods(
    name: Annotated[str, typer.Argument(help="Simple or qualified class name.")],
    roots: RootsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List the fields and methods a class declares."""
    console = _setup_environment(verbose)
    graph = _load_graph(console, _roots(roots))
    ui.display_members(console, _find_class(console, graph, name))


@app.command()
def ancestors(
    name: Annotated[str, typer.Argument(help="Simple or qualified class name.")],
    roots: RootsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show the inheritance chain above a class."""
    console = _setup_environment(verbose)
    graph = _load_graph(console, _roots(roots))
    ui.display_ancestors(console, HierarchyNavigator(graph), _find_class(console, graph, name))


@app.command()
def show(
    name: Annotated[str, typer.Argument(help="Simple or qualified class name.")],
    roots: RootsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Render a class as Java-like source."""
    console = _setup_environment(verbose)
    graph = _load_graph(console, _roots(roots))
    ui.display_class_source(console, _find_class(console, graph, name))


@app.command()
def restore(roots: RootsOption = None, verbose: VerboseOption = False) -> None:
    """Copy the files saved by the last refactoring back into place."""
    console = _setup_environment(verbose)
    match RefactoringOrchestrator().restore(_roots(roots)):
        case Success(paths):
            console.print(f"[green]Restored {len(paths)} file(s).[/green]")
            for path in paths:
                console.print(f"  {path}")
        case Failure(error):
            console.print(
                Panel(f"[bold red]Restore failed:[/bold red]\n{error}", border_style="red")
            )
            raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

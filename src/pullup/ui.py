from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .app import config
from .common.rendering import render_class, render_signature
from .hierarchy.navigator import HierarchyNavigator
from .model.graph import ClassGraph
from .model.nodes import ClassNode
from .models import RefactoringResult


def display_result(console: Console, result: RefactoringResult) -> None:
    """Displays the outcome of a refactoring with its warnings and written files."""
    style = "green" if result.success else "red"
    title = "Refactoring Succeeded" if result.success else "Refactoring Failed"
    console.print(Panel(result.message, title=f"[bold]{title}[/bold]", border_style=style))

    if result.warnings:
        table = Table(title="Warnings", show_header=False, title_justify="left")
        table.add_column("Warning", style="yellow")
        for warning in result.warnings:
            table.add_row(warning)
        console.print(table)

    if result.modified_files:
        table = Table("Modified File", title="Files", title_justify="left")
        for path in result.modified_files:
            table.add_row(path)
        console.print(table)

    if result.visibility_changed:
        console.print(
            f"[dim]Visibility changed in: {', '.join(result.visibility_changed)}[/dim]"
        )


def display_classes(console: Console, graph: ClassGraph) -> None:
    table = Table("Class", "Extends", "Abstract", "Methods", "Fields", "Module")
    for node in sorted(graph, key=lambda n: n.qualified_name):
        table.add_row(
            node.qualified_name,
            node.supertype or config.UNIVERSAL_TOP_TYPE,
            "yes" if node.is_abstract else "",
            str(len(node.methods)),
            str(len(node.fields)),
            node.module or "",
        )
    console.print(table)


def display_members(console: Console, node: ClassNode) -> None:
    table = Table("Declaration", "Override", title=node.qualified_name, title_justify="left")
    for fld in node.fields:
        table.add_row(f"{fld.visibility.keyword} {fld.type_name} {fld.name}".strip(), "")
    for method in node.methods:
        table.add_row(render_signature(method).strip(), "yes" if method.is_override else "")
    console.print(table)


def display_ancestors(console: Console, navigator: HierarchyNavigator, node: ClassNode) -> None:
    chain = [node, *navigator.ancestors_of(node)]
    lines = [f"{'  ' * depth}{cls.qualified_name}" for depth, cls in enumerate(reversed(chain))]
    console.print(Panel("\n".join(lines), title=f"[bold]Ancestors of {node.simple_name}[/bold]"))


def display_class_source(console: Console, node: ClassNode) -> None:
    console.print(
        Panel(
            Syntax(render_class(node), "java", theme=config.RICH_SYNTAX_THEME, line_numbers=True),
            title=f"[bold]{node.qualified_name}[/bold]",
            border_style="blue",
        )
    )

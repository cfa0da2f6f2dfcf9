"""Rich tree visualization for unused classes."""

from collections import defaultdict

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from classprune.models.results import package_of

console = Console()

DEFAULT_PACKAGE = "(default package)"


def _group_by_package(classes: set[str]) -> dict[str, list[str]]:
    by_package: dict[str, list[str]] = defaultdict(list)
    for class_name in classes:
        by_package[package_of(class_name)].append(class_name)
    return by_package


def build_results_tree(unused_classes: set[str], title: str = "Unused classes") -> Tree:
    """Build a Rich tree showing unused classes by package."""
    root = Tree(f"[bold]{title}[/]", guide_style="dim")

    by_package = _group_by_package(unused_classes)
    for package in sorted(by_package):
        package_node = root.add(f"[bold blue]{package or DEFAULT_PACKAGE}[/]")

        for class_name in sorted(by_package[package]):
            item_text = Text()
            item_text.append("x ", style="red bold")
            item_text.append(class_name.rpartition(".")[2], style="red")
            package_node.add(item_text)

    return root


def build_summary_tree(unused_classes: set[str], limit: int = 3) -> Tree:
    """Build a summary tree with counts per package and a few examples."""
    by_package = _group_by_package(unused_classes)

    root = Tree("[bold]Unused Class Summary[/]", guide_style="dim")

    # Largest packages first
    ordered = sorted(by_package.items(), key=lambda kv: (-len(kv[1]), kv[0]))
    for package, classes in ordered:
        package_node = root.add(f"[cyan]{package or DEFAULT_PACKAGE}[/] ({len(classes)} classes)")

        examples = sorted(classes)[:limit]
        if examples:
            examples_node = package_node.add("[dim]Examples:[/]")
            for class_name in examples:
                examples_node.add(f"[red]{class_name}[/]")

    return root


def display_tree(tree: Tree) -> None:
    """Display the tree to console."""
    console.print()
    console.print(tree)
    console.print()

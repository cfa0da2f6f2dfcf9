"""ClassPrune CLI - find JVM classes a full shrink would remove."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from classprune import __version__
from classprune.config import default_config, find_config, get_build_dir, save_config
from classprune.errors import ClassPruneError
from classprune.models.results import UnusedResults
from classprune.output.json_writer import load_results, write_keep_rules, write_results
from classprune.output.tree import build_results_tree, build_summary_tree, display_tree
from classprune.paths import (
    ensure_classprune_dir,
    get_config_path,
    get_minimize_dir,
    get_results_path,
)
from classprune.pipeline import build_tracker, run_analysis
from classprune.tracker import processed_class_path

app = typer.Typer(
    name="classprune",
    help="Find JVM classes in merged dependencies that a full shrink would remove",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"classprune version {__version__}")
        raise typer.Exit()


def _configure_logging(debug: bool) -> None:
    logger = logging.getLogger("classprune")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log engine invocations and pass details",
    ),
) -> None:
    """Find JVM classes a full shrink would remove."""
    _configure_logging(debug)


@app.command()
def init(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the JVM project",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing config file",
    ),
) -> None:
    """Generate a starting config file from the build layout."""
    path = path.resolve()
    config_path = get_config_path(path)

    if config_path.exists() and not force:
        console.print(f"[yellow]Config file already exists:[/] {config_path}")
        console.print("Use [bold]--force[/] to overwrite it.")
        raise typer.Exit(1)

    ensure_classprune_dir(path)
    config = default_config(path)
    save_config(config, config_path)

    class_dirs = config["project"]["class_dirs"]
    console.print(f"[green]Configuration saved to:[/] {config_path}")
    if class_dirs:
        console.print(f"[dim]Class directories:[/] {', '.join(class_dirs)}")
    else:
        console.print("[yellow]No class directories found; edit project.class_dirs.[/]")
    console.print("Set [bold]engine.r8_jar[/] and [bold]project.dependencies[/] before analyzing.")


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the JVM project",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: .classprune/config.json)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Path for results JSON output (default: .classprune/results.json)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show every unused class",
    ),
) -> None:
    """Run both engine passes and report unused classes."""
    path = path.resolve()

    try:
        config_data = find_config(path, config)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Running reachability analysis...", total=None)
            results = run_analysis(config_data, path)
            progress.update(task, completed=True)
    except ClassPruneError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    if output is None:
        ensure_classprune_dir(path)
        output = get_results_path(path)

    write_results(results, output)
    console.print(f"\n[green]Results saved to:[/] {output}")

    _display_summary(results)
    if verbose:
        display_tree(build_results_tree(results.unused_classes))


@app.command("keep-rules")
def keep_rules(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the JVM project",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: .classprune/config.json)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write rules to this file instead of stdout",
    ),
) -> None:
    """Print the keep rules synthesized from the program classes."""
    path = path.resolve()

    try:
        config_data = find_config(path, config)
        rules = build_tracker(config_data, path).get_keep_rules()
    except ClassPruneError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    if output is None:
        for rule in rules:
            typer.echo(rule)
        return

    write_keep_rules(rules, output)
    console.print(f"[green]{len(rules)} keep rules saved to:[/] {output}")


@app.command()
def show(
    results_path: Optional[Path] = typer.Argument(
        None,
        help="Path to results file (default: .classprune/results.json)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show every unused class",
    ),
    package: Optional[str] = typer.Option(
        None,
        "--package",
        "-p",
        help="Only show classes in this package or its subpackages",
    ),
) -> None:
    """Display results from a previous analysis run."""
    if results_path is None:
        results_path = get_results_path(Path.cwd())

    if not results_path.exists():
        console.print(f"[red]Results file not found:[/] {results_path}")
        raise typer.Exit(1)

    data = load_results(results_path)
    unused = set(data.get("unused_classes", []))
    if package:
        unused = {c for c in unused if c.startswith(package + ".")}

    if verbose:
        display_tree(build_results_tree(unused))
    else:
        display_tree(build_summary_tree(unused))


@app.command()
def resolve(
    class_name: str = typer.Argument(
        ...,
        help="Dotted class name or archive entry (com/foo/Bar.class)",
    ),
    path: Path = typer.Argument(
        Path("."),
        help="Path to the JVM project",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: .classprune/config.json)",
    ),
) -> None:
    """Print where the processed bytes of a class are written."""
    path = path.resolve()

    try:
        config_data = find_config(path, config)
    except ClassPruneError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    tmp_dir = get_minimize_dir(get_build_dir(config_data, path))
    typer.echo(str(processed_class_path(tmp_dir, class_name)))


def _display_summary(results: UnusedResults) -> None:
    """Display analysis summary."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    if results.metadata:
        table.add_row("Program inputs", str(results.metadata.program_inputs))
        table.add_row("Minimized dependencies", str(len(results.metadata.dependencies)))
        table.add_row("Duration", f"{results.metadata.analysis_duration_ms} ms")
        table.add_row("", "")

    table.add_row("Unused classes", str(len(results.unused_classes)))
    for package, count in results.by_package.items():
        table.add_row(f"  {package or '(default package)'}", str(count))

    console.print(Panel(table, title="[bold]Unused Class Summary[/]", border_style="blue"))


if __name__ == "__main__":
    app()

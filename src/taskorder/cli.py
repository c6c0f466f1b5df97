"""Command-line interface for the task dependency resolver."""

from pathlib import Path
from typing import NoReturn

import structlog
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import ResolverConfig, load_config
from .core.exporter import OrderExporter, OutputFormat
from .core.loader import load_graph, load_rules
from .core.parser import RuleListParser
from .dependency.resolver import DependencyResolver
from .observability import LogContext, configure_logging
from .utils.exceptions import TaskOrderError

app = typer.Typer(
    name="taskorder",
    help="Task dependency resolver - order tasks so prerequisites run first",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)
logger = structlog.get_logger(__name__)


def _load_config_or_exit(config_file: Path | None) -> ResolverConfig:
    try:
        return load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        err_console.print(f"[red]ERROR: Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


def _setup_logging(config: ResolverConfig, log_level: str | None, json_logs: bool) -> None:
    configure_logging(
        level=log_level or config.logging.level,
        json_logs=json_logs or config.logging.format == "json",
        log_file=config.logging.file,
    )


def _fail(error: Exception) -> NoReturn:
    err_console.print(f"[red]ERROR:[/red] {type(error).__name__}: {escape(str(error))}")
    raise typer.Exit(code=1) from error


@app.command()
def resolve(
    rule_file: Path = typer.Argument(..., help="Rule list file", exists=True),
    root: int | None = typer.Option(
        None, "--root", "-r", help="Task to start ordering from (default: 1)"
    ),
    output_format: OutputFormat | None = typer.Option(
        None, "--format", "-f", help="Output format: text or json"
    ),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log verbosity: DEBUG, INFO, WARNING, ERROR"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON"),
) -> None:
    """
    Resolve a rule list into one execution order.

    Prints task ids on one line, prerequisites first. Tasks not reachable
    from the root are left out.

    Examples:
        taskorder resolve tasks.txt
        taskorder resolve tasks.txt --root 2
        taskorder resolve tasks.txt --format json
    """
    config = _load_config_or_exit(config_file)
    _setup_logging(config, log_level, json_logs)

    root_id = root if root is not None else config.resolution.root_id
    resolver = DependencyResolver(RuleListParser(comment_prefix=config.resolution.comment_prefix))

    with LogContext(rule_file=str(rule_file), root=root_id):
        try:
            task_graph = load_graph(rule_file, resolver)
            result = resolver.resolve(task_graph, root_id)
        except TaskOrderError as e:
            logger.error("Resolution failed", error=str(e))
            _fail(e)

    exporter = OrderExporter(separator=config.output.separator)
    typer.echo(exporter.render(result, output_format or config.output.format))


@app.command()
def validate(
    rule_file: Path = typer.Argument(..., help="Rule list file to validate", exists=True),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log verbosity"),
) -> None:
    """
    Validate a rule list without resolving it.

    Checks:
    - Header shape and task/rule caps
    - Rule syntax and parent counts
    - Task id ranges
    - Declared rule count

    Examples:
        taskorder validate tasks.txt
    """
    config = _load_config_or_exit(config_file)
    _setup_logging(config, log_level, False)

    console.print(f"\n[bold blue]Validating rule list:[/bold blue] {rule_file}\n")

    try:
        rule_list = load_rules(
            rule_file, RuleListParser(comment_prefix=config.resolution.comment_prefix)
        )
    except TaskOrderError as e:
        _fail(e)

    console.print("[green]PASS: Validation successful![/green]")

    table = Table(title="Rule List Summary")
    table.add_column("Item", style="cyan")
    table.add_column("Count", justify="right", style="green")
    table.add_row("Tasks", str(rule_list.task_count))
    table.add_row("Rules", str(len(rule_list.rules)))
    table.add_row("Dependency edges", str(rule_list.edge_count))

    console.print("\n", table)


@app.command()
def graph(
    rule_file: Path = typer.Argument(..., help="Rule list file", exists=True),
    output_file: Path | None = typer.Option(
        None, "--output", "-o", help="Write DOT to this file instead of stdout"
    ),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log verbosity"),
) -> None:
    """
    Output the task graph in Graphviz DOT format.

    Examples:
        taskorder graph tasks.txt
        taskorder graph tasks.txt -o tasks.dot
    """
    config = _load_config_or_exit(config_file)
    _setup_logging(config, log_level, False)

    resolver = DependencyResolver(RuleListParser(comment_prefix=config.resolution.comment_prefix))
    try:
        task_graph = load_graph(rule_file, resolver)
    except TaskOrderError as e:
        _fail(e)

    dot = task_graph.to_dot()
    if output_file:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(dot + "\n", encoding="utf-8")
        console.print(f"[green]Wrote task graph to {output_file}[/green]")
    else:
        typer.echo(dot)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel.fit(
            "[bold]Task Dependency Resolver[/bold]\n\n"
            f"Version: [cyan]{__version__}[/cyan]\n\n"
            "[bold]Features:[/bold]\n"
            "- Rule list validation\n"
            "- Deterministic topological ordering\n"
            "- Cycle detection\n"
            "- Graphviz DOT export",
            title="About",
            border_style="blue",
        )
    )


if __name__ == "__main__":
    app()

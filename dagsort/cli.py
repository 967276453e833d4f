"""dagsort CLI — normalize graph documents from the command line."""

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dagsort import __version__
from dagsort.core.normalize import STRATEGIES

console = Console()


@click.group()
@click.version_option(version=__version__)
def main():
    """dagsort — in-place DAG normalization.

    Reorders an index-linked node array so that every parent is stored
    before its children and every child list is ascending.
    """


def _load(graph_path: str):
    """Load a graph document, or print why not and exit."""
    from dagsort.utils.graph_file import GraphFileError, load_graph

    try:
        return load_graph(graph_path)
    except GraphFileError as e:
        console.print(f"  [red]x[/] {escape(str(e))}")
        for issue in e.issues:
            console.print(f"    - {escape(issue)}")
        raise SystemExit(1)


# ── Normalize ────────────────────────────────────────────────────────


@main.command()
@click.argument("graph_path", type=click.Path(dir_okay=False))
@click.option("--output", "-o", default=None, help="Output file (default: overwrite GRAPH_PATH)")
@click.option("--strategy", type=click.Choice(list(STRATEGIES)), default=None, help="Solver to use")
@click.option("--max-passes", type=click.IntRange(min=1), default=None, help="Pass limit for the 'passes' solver")
@click.option("--check/--no-check", default=None, help="Validate the graph before normalizing")
@click.option("--dry-run", is_flag=True, help="Report what would change without writing")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed counters")
def normalize(
    graph_path: str,
    output: str | None,
    strategy: str | None,
    max_passes: int | None,
    check: bool | None,
    dry_run: bool,
    verbose: bool,
):
    """Normalize a graph document in place.

    Options given on the command line override the document's own
    'options' section.
    """
    from dagsort.core.errors import GraphError, SolverError
    from dagsort.core.links import KeyLinks
    from dagsort.core.normalize import sort
    from dagsort.utils.graph_file import dump_graph

    console.print(f"\n[bold blue]dagsort[/] — Normalizing: {graph_path}\n")

    document = _load(graph_path)
    options = document.resolved_options(strategy=strategy, max_passes=max_passes, check=check)

    if verbose:
        console.print(f"  {len(document.nodes)} node(s), options: {escape(str(options))}")

    try:
        report = sort(document.nodes, KeyLinks(), **options)
    except (GraphError, SolverError) as e:
        console.print(f"  [red]x[/] {escape(str(e))}")
        for issue in getattr(e, "issues", []):
            console.print(f"    - {escape(f'[{issue.code}] {issue.message}')}")
        raise SystemExit(1)

    console.print(Panel(report.summary(), title="Normalize Result"))

    if verbose:
        table = Table(title="Counters")
        table.add_column("Counter", style="cyan")
        table.add_column("Value", justify="right")
        for key, value in report.to_dict().items():
            table.add_row(key, str(value))
        console.print(table)

    if dry_run:
        console.print("[yellow]Dry run: nothing written.[/]")
        return

    target = dump_graph(document, output or graph_path)
    console.print(f"\n[green]Normalized graph written to:[/] {target}")


# ── Check ────────────────────────────────────────────────────────────


@main.command(name="check")
@click.argument("graph_path", type=click.Path(dir_okay=False))
@click.option("--normalized", is_flag=True, help="Also require parent-before-child and ascending children")
def check_cmd(graph_path: str, normalized: bool):
    """Check a graph document against the normalizer's preconditions."""
    from dagsort.checks.invariants import check_graph, check_normalized
    from dagsort.core.links import KeyLinks

    console.print(f"\n[bold blue]dagsort[/] — Checking: {graph_path}\n")

    document = _load(graph_path)
    console.print("  [green]v[/] Schema validation passed")

    links = KeyLinks()
    result = check_graph(document.nodes, links)
    if normalized and result.passed:
        result.issues.extend(check_normalized(document.nodes, links).issues)

    if result.issues:
        table = Table(title=f"Issues ({len(result.issues)} found)")
        table.add_column("Severity", no_wrap=True)
        table.add_column("Code", style="cyan", no_wrap=True)
        table.add_column("Node", justify="right", no_wrap=True)
        table.add_column("Message")

        for issue in result.issues:
            color = "red" if issue.severity.value == "error" else "yellow"
            node = "" if issue.index is None else str(issue.index)
            table.add_row(f"[{color}]{issue.severity.value}[/]", issue.code, node, escape(issue.message))

        console.print(table)

    if result.passed:
        console.print(f"\n[green]Valid![/] {escape(result.summary())}")
    else:
        console.print(f"\n[red]FAIL[/] {escape(result.summary())}")
        raise SystemExit(1)


# ── Schema ───────────────────────────────────────────────────────────


@main.command(name="schema")
def dump_schema():
    """Print the JSON Schema for graph documents."""
    import json

    from dagsort.checks.schema import get_schema

    click.echo(json.dumps(get_schema(), indent=2))


if __name__ == "__main__":
    main()

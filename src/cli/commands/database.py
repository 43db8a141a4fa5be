"""Database bootstrap and inspection commands."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components

console = Console()


@click.group()
def db():
    """Database bootstrap and inspection commands."""
    pass


@db.command()
def init():
    """Create tables and seed facts/patterns (idempotent)."""
    c = get_components()
    store = c["store"]
    console.print(f"[green]Database ready:[/] {store.db_path}")
    console.print(f"Patterns: {len(store.list_patterns())}  Facts: {len(store.list_facts())}")
    store.close()


@db.command()
def patterns():
    """List reply patterns in match order."""
    c = get_components()
    rows = c["store"].list_patterns()
    c["store"].close()

    table = Table(title="Reply patterns", show_header=True)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Pattern", style="cyan", no_wrap=True)
    table.add_column("Response")
    for p in rows:
        table.add_row(str(p.id), p.pattern, p.response)
    console.print(table)


@db.command()
def facts():
    """List searchable facts."""
    c = get_components()
    rows = c["store"].list_facts()
    c["store"].close()

    table = Table(title="Facts", show_header=True)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Category", style="green")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for f in rows:
        table.add_row(str(f.id), f.category, f.key, f.value)
    console.print(table)

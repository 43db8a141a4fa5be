"""Chat turn and history commands."""

import sys

import click
from rich.console import Console
from rich.table import Table

from chat import ChatError
from cli.utils import get_components

console = Console()


def _print_reply(reply) -> None:
    if reply.type == "data":
        table = Table(show_header=True)
        table.add_column("Category", style="green")
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for row in reply.content:
            table.add_row(row["category"], row["key"], row["value"])
        console.print(table)
    else:
        console.print(reply.content)


@click.command()
@click.argument("message")
def ask(message: str):
    """Send one message and print the bot's reply."""
    c = get_components()
    try:
        reply = c["service"].handle_turn(message)
    except ChatError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)
    finally:
        c["store"].close()
    _print_reply(reply)


@click.command()
@click.option("-p", "--page", default=1, help="Page number (1-based)")
@click.option("-n", "--limit", default=None, type=int, help="Messages per page")
def history(page: int, limit: int | None):
    """Show stored messages, oldest first."""
    c = get_components()
    try:
        result = c["service"].history(page=page, limit=limit)
    except ChatError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)
    finally:
        c["store"].close()

    if not result.messages:
        console.print("[yellow]No messages.[/]")
        return

    table = Table(show_header=True)
    table.add_column("Time", style="dim")
    table.add_column("Sender", style="cyan")
    table.add_column("Content")
    for m in result.messages:
        table.add_row(m.timestamp[:19], m.sender.value, m.content[:80])
    console.print(table)
    console.print(
        f"Page {result.current_page}/{result.total_pages} "
        f"({result.total_messages} messages)"
    )


@click.command()
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation")
def clear(yes: bool):
    """Delete all stored messages."""
    if not yes and not click.confirm("Delete all chat history?"):
        console.print("[yellow]Cancelled.[/]")
        return
    c = get_components()
    try:
        deleted = c["service"].clear_history()
    except ChatError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)
    finally:
        c["store"].close()
    console.print(f"[green]Chat history cleared[/] ({deleted} messages)")

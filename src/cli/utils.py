"""Shared CLI utilities."""

import sys

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()


def get_components():
    """Load config and open the store. Exits with a message on config/store errors."""
    from chat import ChatService, ChatStore, PersistenceError
    from cli.config import load_config_model

    try:
        config = load_config_model()
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    try:
        store = ChatStore(config.database.path).open()
    except PersistenceError as e:
        console.print(f"[red]Database error:[/] {e}")
        sys.exit(1)

    service = ChatService(
        store,
        default_limit=config.history.default_limit,
        max_limit=config.history.max_limit,
    )
    return {
        "config": config,
        "store": store,
        "service": service,
    }

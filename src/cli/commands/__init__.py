"""CLI command modules."""

from .database import db
from .server import serve
from .turns import ask, clear, history

__all__ = ["ask", "clear", "db", "history", "serve"]

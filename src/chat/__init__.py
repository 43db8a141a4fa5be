"""Pattern chatbot core: store, reply resolution and turn handling."""

from .errors import ChatError, PersistenceError, ResolutionError, ValidationError
from .models import DataAnswer, Fact, HistoryPage, Message, Reply, ReplyPattern, TextAnswer
from .resolver import FALLBACK_TEXT, TRIGGER_KEYWORDS, ReplyResolver
from .service import ChatService
from .store import ChatStore

__all__ = [
    "ChatError",
    "ChatService",
    "ChatStore",
    "DataAnswer",
    "FALLBACK_TEXT",
    "Fact",
    "HistoryPage",
    "Message",
    "PersistenceError",
    "Reply",
    "ReplyPattern",
    "ReplyResolver",
    "ResolutionError",
    "TRIGGER_KEYWORDS",
    "TextAnswer",
    "ValidationError",
]

"""Chat turn orchestration and history access."""

import math

import structlog

from shared_types import Sender

from .errors import PersistenceError, ValidationError
from .models import HistoryPage, Reply
from .resolver import ReplyResolver
from .store import ChatStore

logger = structlog.get_logger()

DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 500
# Keeps (page - 1) * limit inside SQLite's 64-bit OFFSET
MAX_PAGE = 2**31


class ChatService:
    """Persist the user message, resolve a reply, persist the reply, return it.

    The two inserts are independent statements; a crash between them leaves
    a user message with no bot message.
    """

    def __init__(
        self,
        store: ChatStore,
        resolver: ReplyResolver | None = None,
        default_limit: int = DEFAULT_PAGE_LIMIT,
        max_limit: int = MAX_PAGE_LIMIT,
    ):
        self.store = store
        self.resolver = resolver or ReplyResolver(store)
        self.default_limit = default_limit
        self.max_limit = max_limit

    def handle_turn(self, user_text: str | None) -> Reply:
        """Run one turn.

        Raises:
            ValidationError: Message missing or blank.
            PersistenceError: User message could not be saved.
            ResolutionError: Reply could not be computed.
        """
        if not user_text or not user_text.strip():
            raise ValidationError("Message is required")

        try:
            self.store.add_message(user_text, Sender.USER)
        except PersistenceError as e:
            logger.error("chat.user_message_save_failed", error=str(e))
            raise PersistenceError(f"Failed to save message: {e}") from e

        answer = self.resolver.resolve(user_text)
        reply = Reply.from_answer(answer)

        # History completeness is best-effort; the caller still gets the reply.
        try:
            self.store.add_message(reply.to_json(), Sender.BOT)
        except PersistenceError as e:
            logger.warning("chat.bot_message_save_failed", error=str(e))

        logger.info("chat.turn", reply_type=reply.type.value)
        return reply

    def history(self, page: int | None = None, limit: int | None = None) -> HistoryPage:
        """Page of messages, oldest first. Empty history reports 0 pages."""
        page = page if page and page > 0 else 1
        page = min(page, MAX_PAGE)
        limit = limit if limit and limit > 0 else self.default_limit
        limit = min(limit, self.max_limit)

        messages = self.store.list_messages(limit=limit, offset=(page - 1) * limit)
        total = self.store.count_messages()
        return HistoryPage(
            messages=messages,
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_messages=total,
        )

    def clear_history(self) -> int:
        return self.store.clear_messages()

"""Reply resolution: fact search on trigger keywords, else pattern lookup."""

import re

import structlog

from .errors import PersistenceError, ResolutionError
from .models import Answer, DataAnswer, TextAnswer
from .store import ChatStore

logger = structlog.get_logger()

TRIGGER_KEYWORDS = ("search for", "find", "show", "get", "query")
_TRIGGER_RE = re.compile("|".join(re.escape(k) for k in TRIGGER_KEYWORDS))

FALLBACK_TEXT = (
    "I'm not sure how to respond to that. Could you please rephrase or ask something else?"
)


def extract_search_term(text: str) -> str | None:
    """Return the search term if ``text`` contains a trigger keyword, else None.

    Every occurrence of every trigger is removed, including ones embedded in
    other words ("together" loses its "get").
    """
    normalized = text.lower()
    if not _TRIGGER_RE.search(normalized):
        return None
    return _TRIGGER_RE.sub("", normalized).strip()


class ReplyResolver:
    """Maps a message to a DataAnswer or TextAnswer. Never writes to the store."""

    def __init__(self, store: ChatStore):
        self.store = store

    def resolve(self, message: str) -> Answer:
        normalized = message.lower()
        try:
            term = extract_search_term(normalized)
            if term is not None:
                rows = self.store.search_facts(term)
                if rows:
                    logger.debug("resolver.data_answer", term=term, rows=len(rows))
                    return DataAnswer(rows=rows)

            match = self.store.find_prefix_pattern(normalized)
            if match is None:
                match = self.store.find_contained_pattern(normalized)
        except PersistenceError as e:
            logger.error("resolver.store_failed", error=str(e))
            raise ResolutionError(f"Failed to process response: {e}") from e

        if match is None:
            return TextAnswer(text=FALLBACK_TEXT)
        logger.debug("resolver.pattern_answer", pattern=match.pattern)
        return TextAnswer(text=match.response)

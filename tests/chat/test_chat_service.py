"""Tests for ChatService: turn sequence, failure policy, history paging."""

import json
from unittest.mock import patch

import pytest

from chat import ChatService, PersistenceError, ResolutionError, ValidationError
from chat.resolver import FALLBACK_TEXT
from shared_types import AnswerType, Sender


class TestHandleTurn:
    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_rejects_blank(self, service, store, text):
        with pytest.raises(ValidationError):
            service.handle_turn(text)
        assert store.count_messages() == 0

    def test_text_turn_persists_both_messages(self, service, store):
        reply = service.handle_turn("hello")

        assert reply.type is AnswerType.TEXT
        assert reply.content.startswith("Hi there!")
        msgs = store.list_messages()
        assert [m.sender for m in msgs] == [Sender.USER, Sender.BOT]
        assert msgs[0].content == "hello"
        assert json.loads(msgs[1].content) == {"type": "text", "content": reply.content}

    def test_data_turn(self, service, store):
        reply = service.handle_turn("show email")

        assert reply.to_dict() == {
            "type": "data",
            "content": [
                {"id": 2, "category": "personal", "key": "email", "value": "john@example.com"}
            ],
        }
        assert json.loads(store.list_messages()[1].content) == reply.to_dict()

    def test_fallback_turn(self, service):
        assert service.handle_turn("zzz").content == FALLBACK_TEXT

    def test_user_message_kept_verbatim(self, service, store):
        service.handle_turn("  HELLO  ")
        assert store.list_messages()[0].content == "  HELLO  "

    def test_user_persist_failure_is_fatal(self, service, store):
        with patch.object(store, "add_message", side_effect=PersistenceError("locked")), \
             patch.object(service.resolver, "resolve") as resolve:
            with pytest.raises(PersistenceError):
                service.handle_turn("hello")
        resolve.assert_not_called()

    def test_resolution_failure_propagates(self, service, store):
        with patch.object(store, "find_prefix_pattern", side_effect=PersistenceError("gone")):
            with pytest.raises(ResolutionError):
                service.handle_turn("hello")
        # user message already stored, no bot message
        assert [m.sender for m in store.list_messages()] == [Sender.USER]

    def test_bot_persist_failure_still_returns_reply(self, service, store):
        real_add = store.add_message

        def _add(content, sender):
            if sender == Sender.BOT:
                raise PersistenceError("disk full")
            return real_add(content, sender)

        with patch.object(store, "add_message", side_effect=_add):
            reply = service.handle_turn("bye")

        assert reply.content.startswith("Goodbye!")
        assert [m.sender for m in store.list_messages()] == [Sender.USER]


class TestHistory:
    def test_empty_history(self, service):
        page = service.history()
        assert page.messages == []
        assert page.total_pages == 0
        assert page.total_messages == 0
        assert page.current_page == 1

    def test_paging(self, service):
        for text in ["hello", "help", "bye"]:
            service.handle_turn(text)

        first = service.history(page=1, limit=4)
        second = service.history(page=2, limit=4)
        assert first.total_messages == 6
        assert first.total_pages == 2
        assert first.messages[0].content == "hello"
        assert first.messages[0].sender is Sender.USER
        assert len(second.messages) == 2
        assert second.messages[-1].sender is Sender.BOT

    def test_invalid_page_and_limit_use_defaults(self, store):
        service = ChatService(store, default_limit=3)
        page = service.history(page=0, limit=-5)
        assert page.current_page == 1
        assert page.total_pages == 0

    def test_limit_capped(self, store):
        service = ChatService(store, max_limit=2)
        for i in range(3):
            store.add_message(f"m{i}", Sender.USER)
        page = service.history(limit=100)
        assert len(page.messages) == 2
        assert page.total_pages == 2

    def test_to_dict_shape(self, service):
        service.handle_turn("hello")
        data = service.history().to_dict()
        assert data["pagination"] == {"currentPage": 1, "totalPages": 1, "totalMessages": 2}
        assert data["messages"][0]["sender"] == "user"

    def test_clear_history(self, service):
        service.handle_turn("hello")
        assert service.clear_history() == 2
        page = service.history()
        assert page.messages == []
        assert page.total_pages == 0


def test_huge_page_is_clamped(service):
    from chat.service import MAX_PAGE

    service.handle_turn("hello")
    page = service.history(page=10**19, limit=50)
    assert page.current_page == MAX_PAGE
    assert page.messages == []
    assert page.total_messages == 2

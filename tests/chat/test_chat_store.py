"""Tests for ChatStore: bootstrap, seeding, messages, fact/pattern lookups."""

import sqlite3

import pytest

from chat import ChatStore, PersistenceError
from chat.seed import DEFAULT_FACTS, DEFAULT_PATTERNS
from shared_types import Sender


def test_open_creates_tables_and_seeds(store):
    assert store.is_open
    assert len(store.list_facts()) == len(DEFAULT_FACTS)
    assert [p.pattern for p in store.list_patterns()] == [p for p, _ in DEFAULT_PATTERNS]


def test_open_twice_is_idempotent(db_path):
    ChatStore(db_path).open().close()
    s = ChatStore(db_path).open()
    assert len(s.list_facts()) == len(DEFAULT_FACTS)
    assert len(s.list_patterns()) == len(DEFAULT_PATTERNS)


def test_seed_patterns_upserts(empty_store):
    empty_store.seed_patterns([("hello", "first")])
    empty_store.seed_patterns([("hello", "second")])

    rows = empty_store.list_patterns()
    assert len(rows) == 1
    assert rows[0].response == "second"


def test_seed_facts_only_when_empty(empty_store):
    assert empty_store.seed_facts([("a", "b", "c")]) == 1
    assert empty_store.seed_facts([("x", "y", "z")]) == 0
    assert [f.category for f in empty_store.list_facts()] == ["a"]


def test_add_and_list_messages_oldest_first(store):
    store.add_message("hi", Sender.USER)
    store.add_message("hello", Sender.BOT)

    msgs = store.list_messages()
    assert [m.content for m in msgs] == ["hi", "hello"]
    assert msgs[0].sender is Sender.USER
    assert msgs[1].sender is Sender.BOT
    assert msgs[0].id < msgs[1].id


def test_list_messages_limit_offset(store):
    for i in range(5):
        store.add_message(f"msg {i}", Sender.USER)

    page = store.list_messages(limit=2, offset=2)
    assert [m.content for m in page] == ["msg 2", "msg 3"]
    assert store.count_messages() == 5


def test_empty_content_rejected(store):
    with pytest.raises(PersistenceError):
        store.add_message("", Sender.USER)


def test_invalid_sender_rejected(store):
    with pytest.raises(ValueError):
        store.add_message("hi", "robot")


def test_clear_messages(store):
    store.add_message("one", Sender.USER)
    store.add_message("two", Sender.BOT)

    assert store.clear_messages() == 2
    assert store.count_messages() == 0
    assert store.list_messages() == []


def test_search_facts_case_insensitive(store):
    rows = store.search_facts("JOHN")
    assert {(f.key, f.value) for f in rows} == {
        ("name", "John Doe"),
        ("email", "john@example.com"),
    }


def test_search_facts_matches_category(store):
    rows = store.search_facts("prefer")
    assert [f.key for f in rows] == ["theme", "language"]


def test_search_facts_wildcards_are_literal(store):
    assert store.search_facts("%") == []
    assert store.search_facts("_") == []


def test_search_facts_empty_term_matches_all(store):
    assert len(store.search_facts("")) == len(DEFAULT_FACTS)


def test_find_prefix_pattern(store):
    match = store.find_prefix_pattern("Hello there")
    assert match is not None
    assert match.pattern == "hello"
    assert store.find_prefix_pattern("well hello") is None


def test_find_contained_pattern(store):
    match = store.find_contained_pattern("can you help me")
    assert match is not None
    assert match.pattern == "help"


def test_first_row_wins_by_id(empty_store):
    empty_store.seed_patterns([("he", "short"), ("hello", "long")])
    assert empty_store.find_prefix_pattern("hello").response == "short"


def test_closed_store_raises(db_path):
    s = ChatStore(db_path).open()
    s.close()
    with pytest.raises(PersistenceError):
        s.list_messages()


def test_sqlite_error_wrapped(store):
    with sqlite3.connect(store.db_path) as conn:
        conn.execute("DROP TABLE messages")
    with pytest.raises(PersistenceError):
        store.count_messages()


def test_search_facts_folds_non_ascii_case(empty_store):
    empty_store.seed_facts([("city", "home", "ÉCOLE"), ("city", "work", "Straße")])
    assert [f.value for f in empty_store.search_facts("école")] == ["ÉCOLE"]
    assert [f.value for f in empty_store.search_facts("strasse")] == []
    assert [f.value for f in empty_store.search_facts("STRAßE")] == ["Straße"]


def test_pattern_lookup_folds_non_ascii_case(empty_store):
    empty_store.seed_patterns([("Ölfarbe", "paint"), ("ÜBER", "about")])
    assert empty_store.find_prefix_pattern("ölfarbe please").response == "paint"
    assert empty_store.find_contained_pattern("tell me über it").response == "about"


def test_offset_overflow_wrapped(store):
    with pytest.raises(PersistenceError):
        store.list_messages(limit=50, offset=10**19)


def test_concurrent_bootstrap_seeds_facts_once(db_path):
    from concurrent.futures import ThreadPoolExecutor

    ChatStore(db_path).open(seed=False).close()
    with ThreadPoolExecutor(max_workers=4) as pool:
        stores = list(pool.map(lambda _: ChatStore(db_path).open(), range(4)))

    assert len(stores[0].list_facts()) == len(DEFAULT_FACTS)
    assert len(stores[0].list_patterns()) == len(DEFAULT_PATTERNS)

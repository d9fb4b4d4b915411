from __future__ import annotations

from core.draft import DraftStore
from core.models import Draft


def test_new_store_is_empty_and_not_loaded() -> None:
    store = DraftStore()
    assert store.loaded is False
    assert store.content == ""
    assert store.is_dirty is False


def test_edit_then_load_same_value_is_clean() -> None:
    store = DraftStore()
    store.load("spaces: []\n")
    store.edit("spaces: incorrect-1")
    assert store.is_dirty is True

    store.load("spaces: incorrect-1")
    assert store.is_dirty is False
    assert store.baseline == "spaces: incorrect-1"


def test_edit_to_other_value_is_dirty_and_back_is_clean() -> None:
    store = DraftStore()
    store.load("spaces: []\n")
    store.edit("spaces: [] # Essentially the same")
    assert store.is_dirty is True

    store.edit("spaces: []\n")
    assert store.is_dirty is False


def test_discard_edits_restores_baseline() -> None:
    store = DraftStore()
    store.load("a: 1\n")
    store.edit("a: 2\n")
    store.discard_edits()
    assert store.content == "a: 1\n"
    assert store.baseline == "a: 1\n"
    assert store.is_dirty is False


def test_listeners_see_whole_snapshots_and_skip_no_ops() -> None:
    store = DraftStore()
    seen: list[Draft] = []
    store.subscribe(seen.append)

    store.load("x")
    store.edit("x")
    store.edit("y")

    assert seen == [Draft(content="x", baseline="x"), Draft(content="y", baseline="x")]
    assert store.snapshot() == Draft(content="y", baseline="x")

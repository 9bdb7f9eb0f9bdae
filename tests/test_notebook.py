"""Tests for capture, edit and delete."""

import pytest

from braindump.categorizer import Categorizer
from braindump.errors import NoteNotFoundError
from braindump.notebook import Notebook, capture, generate_id, to_base36


@pytest.fixture
def notebook(db):
    return Notebook(config={"categorizer": {}}, db=db)


def test_add_categorizes_and_tags(notebook):
    note = notebook.add("  muszę zadzwonić do mamy #rodzina @mama  ")

    assert note["content"] == "muszę zadzwonić do mamy #rodzina @mama"
    assert note["category"] == "zadanie"
    assert note["category_icon"] == "✅"
    assert 0 < note["confidence"] <= 1
    assert set(note["tags"]) == {"rodzina", "mama"}
    assert notebook.get(note["id"])["category"] == "zadanie"


@pytest.mark.parametrize("text", ["", "   ", None])
def test_add_rejects_empty(notebook, text):
    with pytest.raises(ValueError):
        notebook.add(text)


def test_edit_recategorizes(notebook):
    note = notebook.add("kupić mleko za 5 zł #dom")

    edited = notebook.edit(note["id"], "dlaczego niebo jest niebieskie?")

    assert edited["category"] == "pytanie"
    assert edited["category_icon"] == "❓"
    assert edited["content"] == "dlaczego niebo jest niebieskie?"
    # tags stay as captured
    assert edited["tags"] == ["dom"]


def test_edit_runs_categorizer_every_time(notebook):
    note = notebook.add("xyz")
    assert note["category"] == "notatka"

    notebook.categorizer.add_keyword("zakupy", "xyz")
    edited = notebook.edit(note["id"], "xyz")

    assert edited["category"] == "zakupy"


def test_edit_missing_note(notebook):
    with pytest.raises(NoteNotFoundError):
        notebook.edit("missing", "tekst")


def test_edit_rejects_empty(notebook):
    note = notebook.add("notatka")

    with pytest.raises(ValueError):
        notebook.edit(note["id"], "  ")


def test_delete(notebook):
    note = notebook.add("notatka")

    assert notebook.delete(note["id"])
    assert not notebook.delete(note["id"])
    with pytest.raises(NoteNotFoundError):
        notebook.get(note["id"])


def test_list_notes_filter(notebook):
    task = notebook.add("muszę zadzwonić do mamy")
    question = notebook.add("dlaczego niebo jest niebieskie?")

    assert [n["id"] for n in notebook.list_notes()] == [question["id"], task["id"]]
    assert [n["id"] for n in notebook.list_notes(category="zadanie")] == [task["id"]]


def test_categories_come_from_categorizer(notebook):
    assert notebook.categories() == notebook.categorizer.get_all_categories()


def test_learn_persists_and_replays(db):
    first = Notebook(config={"categorizer": {}}, db=db)
    assert first.learn("zakupy", "Biedronka")

    second = Notebook(config={"categorizer": {}}, db=db)

    assert "biedronka" in second.categorizer.table["zakupy"].keywords
    assert second.add("biedronka jutro")["category"] == "zakupy"


def test_shared_categorizer_gets_learned_keyword_once(db):
    categorizer = Categorizer()
    Notebook(config={"categorizer": {}}, db=db, categorizer=categorizer).learn("zakupy", "biedronka")
    Notebook(config={"categorizer": {}}, db=db, categorizer=categorizer)

    assert categorizer.table["zakupy"].keywords.count("biedronka") == 1
    assert categorizer.scores("biedronka")["zakupy"] == 2


@pytest.mark.parametrize("category, keyword", [("nope", "x"), ("zakupy", "  ")])
def test_learn_rejects_unknown_category_or_empty_keyword(notebook, db, category, keyword):
    assert not notebook.learn(category, keyword)
    assert db.get_learned_keywords() == []


def test_generate_id_unique():
    ids = {generate_id() for _ in range(200)}

    assert len(ids) == 200


@pytest.mark.parametrize("number, expected", [(0, "0"), (35, "z"), (36, "10"), (1295, "zz")])
def test_to_base36(number, expected):
    assert to_base36(number) == expected


def test_capture_uses_default_locations(isolated_home):
    note = capture("muszę zadzwonić do mamy")

    assert note["category"] == "zadanie"
    assert (isolated_home / "braindump.db").exists()

import pytest

from f1hub.db.store import DocumentStore


def standings_fields(round_no=3, entries=None):
    return {"season": 2026, "round": round_no, "standings": entries or []}


def test_commit_writes_every_staged_document(ctx):
    batch = ctx.store.batch()
    batch.set("standings", "drivers", standings_fields(entries=[{"position": 1}]))
    batch.set("standings", "constructors", standings_fields())
    assert len(batch) == 2

    written = batch.commit()

    assert written == [("standings", "drivers"), ("standings", "constructors")]
    doc = ctx.store.get("standings", "drivers")
    assert doc["standings"] == [{"position": 1}]
    assert doc["updated_at"] is not None


def test_empty_batch_commits_nothing(ctx):
    assert ctx.store.batch().commit() == []


def test_set_requires_the_whole_document(ctx):
    batch = ctx.store.batch()
    with pytest.raises(ValueError):
        batch.set("standings", "drivers", {"season": 2026, "round": 3})
    with pytest.raises(ValueError):
        batch.set("standings", "drivers", {**standings_fields(), "extra": 1})


def test_only_known_documents(ctx):
    batch = ctx.store.batch()
    with pytest.raises(ValueError):
        batch.set("standings", "teams", standings_fields())
    with pytest.raises(ValueError):
        batch.set("comments", "1", {})


def test_get_missing_document(ctx):
    assert isinstance(ctx.store, DocumentStore)
    assert ctx.store.get("results", "2026_01") is None

from datetime import datetime, timezone

import pytest

from f1hub.core.errors import SyncFailedError
from f1hub.db.store import WriteBatch
from f1hub.services.sync import SyncJob, next_run_after
from tests.factories import (
    FakeProvider,
    constructor_standings_payload,
    driver_standings_payload,
    empty_results_payload,
    provider_down,
    result_row,
    results_payload,
)


def make_job(ctx, provider=None, timeout=1.0):
    return SyncJob(provider or FakeProvider(), ctx.store, 2026, timeout=timeout)


def test_round_five_results_written_under_padded_key(ctx):
    report = make_job(ctx).run()

    doc = ctx.store.get("results", "2026_05")
    assert doc is not None
    assert doc["round"] == 5
    assert doc["season"] == 2026
    assert len(doc["results"]) == 20
    assert [r["position"] for r in doc["results"]] == list(range(1, 21))
    assert all(isinstance(r["position"], int) for r in doc["results"])
    assert doc["updated_at"] is not None
    assert ("results", "2026_05") in report.written
    assert report.skipped == {}


def test_all_three_sources_fetched_for_the_season(ctx):
    provider = FakeProvider()
    make_job(ctx, provider).run()
    assert sorted(provider.calls) == [
        ("constructor_standings", 2026),
        ("driver_standings", 2026),
        ("last_results", 2026),
    ]


def test_empty_results_write_no_result_document(ctx):
    provider = FakeProvider(results=empty_results_payload())
    report = make_job(ctx, provider).run()

    assert ctx.store.list("results") == []
    assert report.skipped == {}
    assert [c for c, _ in report.written] == ["standings", "standings"]


def test_standings_are_replaced_not_merged(ctx):
    make_job(ctx, FakeProvider(drivers=driver_standings_payload(round_no=4))).run()
    assert ctx.store.get("standings", "drivers")["round"] == 4
    assert len(ctx.store.get("standings", "drivers")["standings"]) == 20

    two = [("NOR", "Lando", "Norris", "British", "McLaren"),
           ("PIA", "Oscar", "Piastri", "Australian", "McLaren")]
    make_job(ctx, FakeProvider(drivers=driver_standings_payload(round_no=5, drivers=two))).run()

    doc = ctx.store.get("standings", "drivers")
    assert doc["round"] == 5
    assert [e["driver_code"] for e in doc["standings"]] == ["NOR", "PIA"]


def test_rerun_with_same_data_is_a_no_op(ctx):
    make_job(ctx).run()
    first = ctx.store.get("results", "2026_05")
    make_job(ctx).run()
    second = ctx.store.get("results", "2026_05")

    first.pop("updated_at")
    second.pop("updated_at")
    assert first == second
    assert len(ctx.store.list("results")) == 1


def test_missing_source_is_skipped_not_fatal(ctx):
    provider = FakeProvider(results=provider_down("last/results/"))
    report = make_job(ctx, provider).run()

    assert "results" in report.skipped
    assert ctx.store.list("results") == []
    assert ctx.store.get("standings", "drivers") is not None
    assert ctx.store.get("standings", "constructors") is not None


def test_malformed_source_is_skipped(ctx):
    provider = FakeProvider(constructors={"MRData": {}})
    report = make_job(ctx, provider).run()

    assert "constructorStandings" in report.skipped
    assert ctx.store.get("standings", "constructors") is None
    assert ctx.store.get("results", "2026_05") is not None


def test_every_source_failing_fails_the_run(ctx):
    provider = FakeProvider(
        results=provider_down(),
        drivers=provider_down(),
        constructors={"not": "ergast"},
    )
    with pytest.raises(SyncFailedError) as exc:
        make_job(ctx, provider).run()

    assert set(exc.value.failures) == {"results", "driverStandings", "constructorStandings"}
    assert ctx.store.list("results") == []
    assert ctx.store.get("standings", "drivers") is None


def test_slow_source_is_abandoned(ctx):
    provider = FakeProvider(delay={"driver_standings": 1.0})
    report = make_job(ctx, provider, timeout=0.1).run()

    assert "driverStandings" in report.skipped
    assert ctx.store.get("standings", "drivers") is None
    assert ctx.store.get("results", "2026_05") is not None


def test_rejected_commit_leaves_every_document_untouched(ctx, monkeypatch):
    make_job(ctx, FakeProvider(
        results=results_payload(round_no=4),
        drivers=driver_standings_payload(round_no=4),
        constructors=constructor_standings_payload(round_no=4),
    )).run()
    before = {
        "results": ctx.store.list("results"),
        "drivers": ctx.store.get("standings", "drivers"),
        "constructors": ctx.store.get("standings", "constructors"),
    }

    original = WriteBatch._apply
    applied = []

    def reject_third(self, session, collection, key, fields):
        if len(applied) == 2:
            raise RuntimeError("store rejected the batch")
        applied.append(key)
        original(self, session, collection, key, fields)

    monkeypatch.setattr(WriteBatch, "_apply", reject_third)
    with pytest.raises(RuntimeError):
        make_job(ctx).run()

    assert applied == ["2026_05", "drivers"]
    assert ctx.store.list("results") == before["results"]
    assert ctx.store.get("standings", "drivers") == before["drivers"]
    assert ctx.store.get("standings", "constructors") == before["constructors"]


def test_result_rows_keep_optional_fields(ctx):
    rows = [result_row(1, "VER", "Max", "Verstappen", "Red Bull"),
            result_row(2, "NOR", "Lando", "Norris", "McLaren", finished=False)]
    make_job(ctx, FakeProvider(results=results_payload(round_no=1, rows=rows))).run()

    doc = ctx.store.get("results", "2026_01")
    assert doc["results"][0]["time"] == "1:31:44.742"
    assert doc["results"][1]["time"] is None
    assert doc["results"][1]["status"] == "Retired"


@pytest.mark.parametrize("now, expected", [
    (datetime(2026, 5, 3, 5, 59, tzinfo=timezone.utc), datetime(2026, 5, 3, 6, 0, tzinfo=timezone.utc)),
    (datetime(2026, 5, 3, 6, 0, tzinfo=timezone.utc), datetime(2026, 5, 4, 6, 0, tzinfo=timezone.utc)),
    (datetime(2026, 12, 31, 23, 0, tzinfo=timezone.utc), datetime(2027, 1, 1, 6, 0, tzinfo=timezone.utc)),
])
def test_next_run_after(now, expected):
    assert next_run_after(now, 6) == expected

from f1hub.services.sync import SyncJob
from tests.factories import FakeProvider


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_reference_data_ordering(client):
    drivers = client.get("/drivers").json()
    assert [d["number"] for d in drivers] == [1, 16]
    assert drivers[1]["team_id"] == "ferrari"

    races = client.get("/races").json()
    assert [r["round"] for r in races] == [1, 6]
    assert races[0]["date"] == "2026-03-08"

    assert {t["id"] for t in client.get("/teams").json()} == {"ferrari", "mclaren"}


def test_single_race(client):
    assert client.get("/races/miami").json()["name"] == "Miami Grand Prix"
    assert client.get("/races/monaco").status_code == 404


def test_nothing_synced_yet(client):
    assert client.get("/results").json() == []
    assert client.get("/results/2026_05").status_code == 404
    assert client.get("/standings/drivers").status_code == 404


def test_result_key_must_be_canonical(client):
    assert client.get("/results/2026_5").status_code == 422
    assert client.get("/standings/teams").status_code == 404


def test_synced_documents_are_served(client, ctx):
    SyncJob(FakeProvider(), ctx.store, 2026).run()

    body = client.get("/results/2026_05").json()
    assert body["id"] == "2026_05"
    assert body["round"] == 5
    assert len(body["results"]) == 20
    assert [r["round"] for r in client.get("/results").json()] == [5]

    drivers = client.get("/standings/drivers").json()
    assert drivers["round"] == 5
    assert drivers["standings"][0]["driver_code"] == "VER"

    constructors = client.get("/standings/constructors").json()
    assert constructors["standings"][0]["name"] == "McLaren"

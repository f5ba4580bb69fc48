from fastapi.testclient import TestClient

from screenpick.app import app
from screenpick.data_ingestion.ingest import LoadError
from screenpick.recommendations.data_store import DatasetCache, get_dataset_cache


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_metadata_lists_filter_vocabulary(client):
    resp = client.get("/metadata")
    assert resp.status_code == 200
    body = resp.json()
    assert "Comedy" in body["genres"]
    assert 1990 in body["decades"]
    assert "happy" in body["moods"]
    assert body["total_movies"] == 30


def test_recommendations_default_page(client):
    resp = client.post("/recommendations", json={})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert len(body["movies"]) == 6
    assert body["total_results"] == 30
    assert body["message"]


def test_recommendations_filters(client):
    resp = client.post("/recommendations", json={"genre": "Comedy", "year": 1995, "limit": 10})
    body = resp.json()
    assert body["total_results"] > 0
    for movie in body["movies"]:
        assert 1990 <= movie["year"] <= 1999
        assert any("comedy" in g.lower() for g in movie["genres"])


def test_recommendations_unknown_genre_is_empty_success(client):
    resp = client.post("/recommendations", json={"genre": "Nonexistent12345"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["movies"] == []
    assert body["total_results"] == 0


def test_recommendations_out_of_range_paging_is_not_rejected(client):
    resp = client.post("/recommendations", json={"offset": 500, "limit": -1})
    assert resp.status_code == 200
    assert resp.json()["movies"] == []


def test_recommendations_load_more_is_reproducible(client):
    payload = {"language": "en", "offset": 6, "limit": 6}
    first = client.post("/recommendations", json=payload).json()
    second = client.post("/recommendations", json=payload).json()
    assert [m["id"] for m in first["movies"]] == [m["id"] for m in second["movies"]]


def test_trending(client):
    resp = client.get("/trending")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["movies"]) == 12
    assert all(m["year"] >= 2010 for m in body["movies"])


def test_favorites_flow(client):
    movie = {"title": "Inception", "year": 2010, "rating": 8.8}

    resp = client.post("/favorites", json=movie)
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    client.post("/favorites", json=movie)
    listing = client.get("/favorites").json()
    assert listing["total"] == 1
    assert listing["favorites"][0]["movie_title"] == "Inception"

    assert client.get("/favorites/Inception").json()["is_favorited"] is True

    resp = client.delete("/favorites/Inception")
    assert resp.json()["success"] is True
    assert client.get("/favorites/Inception").json()["is_favorited"] is False


def test_favorites_rejects_missing_title(client):
    resp = client.post("/favorites", json={"title": "", "year": 2010})
    assert resp.status_code == 422


def test_sync_status_without_remote(client):
    resp = client.get("/sync/status")
    assert resp.status_code == 200
    assert resp.json()["available"] is False


def test_analytics_tracks_searches_and_favorites(client):
    client.post("/recommendations", json={"genre": "Drama"})
    client.post("/recommendations", json={"genre": "Drama", "offset": 6})
    client.get("/trending")
    client.post("/favorites", json={"title": "Heat", "year": 1995, "rating": 8.3})

    body = client.get("/analytics").json()
    assert body["total_searches"] == 2
    assert body["top_genres"][0] == {"name": "Drama", "count": 2}
    assert body["filter_usage"]["genre"] == 100.0
    assert body["load_more_rate"] == 50.0
    assert body["trending_views"] == 1
    assert body["favorites"]["added"] == 1


def test_first_load_failure_returns_503():
    def failing_fetch(config):
        raise LoadError("unreachable")

    app.dependency_overrides[get_dataset_cache] = lambda: DatasetCache(fetch=failing_fetch)
    try:
        with TestClient(app) as c:
            resp = c.post("/recommendations", json={})
            assert resp.status_code == 503
            body = resp.json()
            assert body["success"] is False
            assert body["movies"] == []
    finally:
        app.dependency_overrides.clear()

"""
Tests for the Flask JSON API.
"""
import pytest


@pytest.fixture
def client():
    """Flask test client."""
    from app import app
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


class TestHealth:
    """Health endpoint."""

    def test_health(self, client):
        """Reports status and feed cadence."""
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["status"] == "healthy"
        assert data["news_refresh_seconds"] == 150
        assert data["max_instruments_per_headline"] == 2


class TestAnalyze:
    """Single headline endpoint."""

    def test_analyze(self, client):
        """Returns matches, relevance, topic and segments."""
        resp = client.post("/api/headlines/analyze", json={
            "headline": "AI chip boom lifts Nvidia and rivals", "datetime": 1717000000,
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert [m["symbol"] for m in data["matches"]] == ["NVDA", "SOXX"]
        assert data["relevance"]["signals"] == ["ticker:NVDA", "etf:SOXX"]
        assert data["topic"]["label"] == "Markets"
        assert "".join(s["text"] for s in data["segments"]) == "AI chip boom lifts Nvidia and rivals"

    def test_validation_error(self, client):
        """Bad records are rejected with 400."""
        resp = client.post("/api/headlines/analyze", json={"headline": "x", "datetime": "soon"})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "invalid headline"

    def test_not_an_object(self, client):
        """Non-object bodies are rejected."""
        resp = client.post("/api/headlines/analyze", json=["x"])
        assert resp.status_code == 400

    def test_unexpected_error(self, client, monkeypatch):
        """Unexpected failures return 500 with the message."""
        import app as app_module

        def boom(_):
            raise RuntimeError("boom")

        monkeypatch.setattr(app_module.pipeline, "analyze", boom)
        resp = client.post("/api/headlines/analyze", json={"headline": "x"})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "boom"}


class TestBatch:
    """Batch endpoint."""

    def test_batch(self, client, sample_feed):
        """Returns analyses, stats and mentioned symbols."""
        resp = client.post("/api/headlines/batch", json={"headlines": sample_feed})
        assert resp.status_code == 200
        data = resp.get_json()
        assert len(data["analyses"]) == 5
        assert data["stats"]["kept_headlines"] == 4
        assert data["mentioned_symbols"][0] == {"symbol": "NVDA", "count": 2}

    def test_markets_only(self, client, sample_feed):
        """markets_only drops hidden headlines."""
        resp = client.post("/api/headlines/batch", json={"headlines": sample_feed, "markets_only": "true"})
        data = resp.get_json()
        assert len(data["analyses"]) == 4
        assert all(a["relevance"]["keep"] for a in data["analyses"])

    def test_missing_headlines(self, client):
        """headlines must be a list."""
        resp = client.post("/api/headlines/batch", json={"headlines": "nope"})
        assert resp.status_code == 400

    def test_invalid_record(self, client):
        """One invalid record rejects the batch."""
        resp = client.post("/api/headlines/batch", json={"headlines": [{"headline": "x", "datetime": "soon"}]})
        assert resp.status_code == 400


def test_lexicon(client):
    """Table sizes are exposed."""
    resp = client.get("/api/headlines/lexicon")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["theme_rules"] > 0
    assert data["company_names"] > data["known_tickers"] / 2

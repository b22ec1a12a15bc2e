def test_health_reports_database(client):
    res = client.get("/api/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok", "dataAvailable": True, "message": None}


def test_legacy_health(client):
    assert client.get("/health").json()["status"] == "ok"

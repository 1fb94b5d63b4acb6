def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_health_check(client):
    """The health endpoint reports the database as reachable"""
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["database"] == "connected"
    assert body["environment"] == "testing"


def test_unknown_route_uses_error_shape(client):
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert "details" not in body

def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "message" in resp.json()
    assert "x-process-time" in resp.headers


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_unknown_route_has_error_shape(client):
    resp = client.get("/api/v1/nothing-here")
    assert resp.status_code == 404
    assert resp.json()["code"] == "http_error"


def test_cors_allows_web_origin(client, settings):
    resp = client.options(
        "/api/v1/listings",
        headers={
            "Origin": settings.web_origin,
            "Access-Control-Request-Method": "GET",
        },
    )
    assert resp.headers["access-control-allow-origin"] == settings.web_origin

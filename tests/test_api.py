from app.main import DEVELOPMENT_ORIGINS, MAX_BODY_BYTES, PRODUCTION_ORIGINS, allowed_origins


def test_health_is_always_ok(offline_client):
    response = offline_client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "ivor-community"
    assert "community-analytics" in body["features"]


def test_security_headers_are_set(client):
    response = client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"


def test_overview_with_live_data(live_client):
    response = live_client.get("/api/analytics/overview")
    assert response.status_code == 200
    insights = response.json()["communityIntelligence"]["insights"]
    assert insights["topNeeds"] == ["Housing", "Mental Health", "Crisis Support"]


def test_overview_survives_data_source_failure(offline_client):
    response = offline_client.get("/api/analytics/overview")
    assert response.status_code == 200
    trends = response.json()["communityIntelligence"]["trends"]
    assert trends["topDemandAreas"][0] == {"category": "Crisis Support", "demandScore": 95}


def test_overview_reports_unexpected_failure(client):
    from app.dependencies import get_random_source
    from app.main import app

    class BrokenRandom:
        def randint(self, a, b):
            raise RuntimeError("boom")

    app.dependency_overrides[get_random_source] = lambda: BrokenRandom()
    response = client.get("/api/analytics/overview")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate community intelligence overview"}


def test_chat_trend_intent(live_client):
    response = live_client.post("/api/chat", json={"message": "Show me the DATA"})
    assert response.status_code == 200
    body = response.json()
    assert body["domain"] == "community"
    assert "analytics" in body
    assert "timestamp" in body


def test_chat_gap_intent(offline_client):
    body = offline_client.post("/api/chat", json={"message": "what do people need?"}).json()
    assert [gap["category"] for gap in body["resourceGaps"]] == ["Mental Health", "Housing"]


def test_chat_missing_message_returns_apology(client):
    response = client.post("/api/chat", json={"text": "hi"})
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Community intelligence service error"
    assert body["response"].startswith("I'm analyzing community patterns")


def test_chat_invalid_json_returns_apology(client):
    response = client.post("/api/chat", content=b"not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 500


def test_oversized_body_is_rejected(client):
    response = client.post(
        "/api/chat",
        content=b" " * (MAX_BODY_BYTES + 1),
        headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 413


def test_cors_allows_listed_origin(client):
    origin = DEVELOPMENT_ORIGINS[0]
    response = client.options(
        "/api/chat",
        headers={"Origin": origin, "Access-Control-Request-Method": "POST"}
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == origin


def test_cors_rejects_unlisted_origin(client):
    response = client.options(
        "/api/chat",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"}
    )
    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers


def test_production_mode_uses_restrictive_allowlist():
    assert allowed_origins("production") == PRODUCTION_ORIGINS
    assert "http://localhost:5173" not in allowed_origins("production")
    assert allowed_origins("development") == DEVELOPMENT_ORIGINS


def test_chunked_oversized_body_is_rejected(client):
    def chunks():
        yield b'{"message": "hello '
        sent = 0
        while sent <= MAX_BODY_BYTES:
            yield b"x" * 65536
            sent += 65536
        yield b'"}'

    response = client.post("/api/chat", content=chunks(), headers={"Content-Type": "application/json"})
    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}


def test_rejected_preflight_still_gets_security_headers(client):
    response = client.options(
        "/api/chat",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"}
    )
    assert response.status_code == 400
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"


def test_chat_timestamp_uses_millisecond_utc_format(client):
    timestamp = client.post("/api/chat", json={"message": "hello"}).json()["timestamp"]
    assert timestamp.endswith("Z")
    assert len(timestamp) == len("2024-05-01T12:00:00.000Z")

from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "UP"}
    assert response.content == b'{"status":"UP"}'


def test_health_sets_request_id(client: TestClient) -> None:
    response = client.get("/health")
    assert response.headers.get("x-request-id")

    echoed = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert echoed.headers["x-request-id"] == "abc-123"

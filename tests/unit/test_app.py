def test_root_returns_message(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "HR ERP API"


def test_data_routes_unavailable_without_backend(client):
    from tests.conftest import make_token

    response = client.get("/api/v1/employees", headers={"Authorization": f"Bearer {make_token()}"})
    assert response.status_code == 503
    assert response.json()["detail"] == "Backend not configured"

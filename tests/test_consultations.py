import pytest


@pytest.fixture
def consultation():
    return {
        "name": "이영희",
        "phone": "01012345678",
        "age": 34,
        "gender": "여성",
        "desiredCategory": "CAFE_BAKERY",
        "desiredLocation": "서울 마포구",
        "investmentAmount": 100000000,
        "details": "1층 매장 희망",
    }


def test_create_without_login(client, consultation):
    resp = client.post("/api/v1/consultations", json=consultation)
    assert resp.status_code == 201
    body = resp.json()
    assert body["desiredLocation"] == "서울 마포구"
    assert body["investmentAmount"] == 100000000
    assert "id" in body and "createdAt" in body


def test_create_validation(client, consultation):
    consultation.update(phone="0101", age=0, details="가" * 201)
    resp = client.post("/api/v1/consultations", json=consultation)
    assert resp.status_code == 400
    assert {"phone", "age", "details"} <= set(resp.json()["errors"])


def test_list_newest_first(client, admin_headers, consultation):
    first = client.post("/api/v1/consultations", json=consultation).json()
    second = client.post(
        "/api/v1/consultations", json={**consultation, "name": "박민수"}
    ).json()

    resp = client.get("/api/v1/consultations", headers=admin_headers)
    assert resp.status_code == 200
    assert [c["id"] for c in resp.json()] == [second["id"], first["id"]]


def test_list_requires_admin(client, user_headers):
    assert client.get("/api/v1/consultations").status_code == 401
    assert client.get("/api/v1/consultations", headers=user_headers).status_code == 403


def test_delete(client, admin_headers, user_headers, consultation):
    created = client.post("/api/v1/consultations", json=consultation).json()
    url = f"/api/v1/consultations/{created['id']}"

    assert client.delete(url, headers=user_headers).status_code == 403

    resp = client.delete(url, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "상담 신청 내역이 삭제되었습니다."
    assert client.get("/api/v1/consultations", headers=admin_headers).json() == []
    assert client.delete(url, headers=admin_headers).status_code == 404

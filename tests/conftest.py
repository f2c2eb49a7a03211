from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from storelease.clients.storage import StorageClient
from storelease.database import build_engine
from storelease.errors import UpstreamError
from storelease.main import create_app
from storelease.settings import Settings

ADMIN_EMAIL = "admin@example.com"
PASSWORD = "secret123"


class FakeStorage(StorageClient):
    def __init__(self):
        super().__init__(None, "test-bucket")
        self.calls = []

    def presign_put(self, key, content_type, expires_in):
        self.calls.append((key, content_type, expires_in))
        return (
            f"https://test-bucket.s3.ap-northeast-2.amazonaws.com/{key}"
            f"?X-Amz-Expires={expires_in}&X-Amz-Signature=abc123"
        )


class FakeSms:
    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, to, text):
        if self.fail:
            raise UpstreamError()
        self.sent.append((to, text))


class FakeKakao:
    def __init__(self):
        self.profile = {"id": "1001", "nickname": "카카오친구", "email": "kakao@example.com"}

    def authorize_url(self):
        return "https://kauth.kakao.com/oauth/authorize?client_id=test-client"

    def exchange_code(self, code):
        if code == "bad":
            raise UpstreamError()
        return "provider-token"

    def fetch_profile(self, access_token):
        return dict(self.profile)


@pytest.fixture
def settings():
    return Settings(
        db_url="sqlite://",
        jwt_secret="test-secret",
        admin_emails=[ADMIN_EMAIL],
        log_level="WARNING",
    )


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def sms():
    return FakeSms()


@pytest.fixture
def kakao():
    return FakeKakao()


@pytest.fixture
def make_app(settings, storage, sms, kakao):
    def _make(**overrides):
        app_settings = settings.model_copy(update=overrides)
        return create_app(
            settings=app_settings,
            engine=build_engine("sqlite://"),
            storage=storage,
            sms=sms,
            kakao=kakao,
        )

    return _make


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


def register_and_login(client, email, name="홍길동", password=PASSWORD):
    resp = client.post(
        "/api/v1/auth/register",
        json={"email": email, "name": name, "password": password},
    )
    assert resp.status_code == 201, resp.text
    resp = client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def admin_headers(client):
    return register_and_login(client, ADMIN_EMAIL, name="관리자")


@pytest.fixture
def user_headers(client):
    return register_and_login(client, "user@example.com")


def listing_payload(**overrides):
    payload = {
        "name": "강남역 카페",
        "summary": "역세권 1층 카페",
        "address": "서울시 강남구 테헤란로 1",
        "region": "METROPOLITAN",
        "category": "CAFE_BAKERY",
        "deposit": 30000000,
        "monthlyRent": 2500000,
        "keyMoney": 50000000,
        "monthlyRevenue": 40000000,
        "materialCost": 12000000,
        "personnelCost": 8000000,
        "netProfit": 9000000,
        "description": "오픈 3년차, 단골 고객 다수",
        "coverImage": "https://cdn.example.com/listings/cover.jpg",
        "imageUrls": ["https://cdn.example.com/listings/1.jpg"],
        "status": "PUBLISHED",
    }
    payload.update(overrides)
    return payload


def feature_window(days_before=1, days_after=1):
    now = datetime.now()
    return {
        "isWeeklyBest": True,
        "featuredStart": (now - timedelta(days=days_before)).isoformat(),
        "featuredEnd": (now + timedelta(days=days_after)).isoformat(),
    }


@pytest.fixture
def create_listing(client, admin_headers):
    def _create(**overrides):
        resp = client.post(
            "/api/v1/listings", json=listing_payload(**overrides), headers=admin_headers
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create

import pytest
import requests

from storelease.clients.kakao import KakaoClient
from storelease.clients.sms import SmsClient
from storelease.errors import UpstreamError


class FakeResponse:
    def __init__(self, status_code=200, data=None):
        self.status_code = status_code
        self._data = data or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._data


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def _call(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response

    def post(self, url, **kwargs):
        return self._call("POST", url, **kwargs)

    def get(self, url, **kwargs):
        return self._call("GET", url, **kwargs)


def test_sms_send_signs_request():
    session = FakeSession()
    client = SmsClient("key", "secret", "0212345678", session=session)
    client.send("01012345678", "hello")

    method, url, kwargs = session.calls[0]
    assert url == "https://api.coolsms.co.kr/messages/v4/send"
    assert kwargs["json"] == {
        "message": {"to": "01012345678", "from": "0212345678", "text": "hello"}
    }
    header = kwargs["headers"]["Authorization"]
    assert header.startswith("HMAC-SHA256 apiKey=key, date=")
    assert "signature=" in header
    assert kwargs["timeout"] == 10


def test_sms_send_error_status():
    client = SmsClient("key", "secret", "0212345678", session=FakeSession(FakeResponse(500)))
    with pytest.raises(UpstreamError):
        client.send("01012345678", "hello")


def test_sms_send_transport_error():
    session = FakeSession(error=requests.ConnectionError("down"))
    client = SmsClient("key", "secret", "0212345678", session=session)
    with pytest.raises(UpstreamError):
        client.send("01012345678", "hello")


def test_kakao_authorize_url():
    client = KakaoClient("cid", "", "http://localhost:4000/api/v1/auth/kakao/callback")
    url = client.authorize_url()
    assert url.startswith("https://kauth.kakao.com/oauth/authorize?")
    assert "client_id=cid" in url
    assert "response_type=code" in url


def test_kakao_exchange_code():
    session = FakeSession(FakeResponse(data={"access_token": "abc"}))
    client = KakaoClient("cid", "csecret", "http://cb", session=session)
    assert client.exchange_code("the-code") == "abc"
    data = session.calls[0][2]["data"]
    assert data["code"] == "the-code"
    assert data["client_secret"] == "csecret"


def test_kakao_exchange_code_without_token():
    client = KakaoClient("cid", "", "http://cb", session=FakeSession(FakeResponse(data={})))
    with pytest.raises(UpstreamError):
        client.exchange_code("the-code")


def test_kakao_fetch_profile():
    data = {
        "id": 12345,
        "kakao_account": {"email": "a@b.com", "profile": {"nickname": "닉네임"}},
    }
    client = KakaoClient("cid", "", "http://cb", session=FakeSession(FakeResponse(data=data)))
    assert client.fetch_profile("tok") == {
        "id": "12345",
        "nickname": "닉네임",
        "email": "a@b.com",
    }


def test_kakao_fetch_profile_minimal():
    client = KakaoClient("cid", "", "http://cb", session=FakeSession(FakeResponse(data={"id": 7})))
    assert client.fetch_profile("tok") == {"id": "7", "nickname": None, "email": None}

import logging
from urllib.parse import urlencode

import requests

from storelease.errors import UpstreamError
from storelease.settings import Settings
from storelease.vars import (
    HTTP_TIMEOUT_SECONDS,
    KAKAO_AUTHORIZE_URL,
    KAKAO_PROFILE_URL,
    KAKAO_TOKEN_URL,
)

logger = logging.getLogger(__name__)


class KakaoClient:
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        session: requests.Session | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "KakaoClient":
        return cls(
            settings.kakao_client_id,
            settings.kakao_client_secret,
            settings.kakao_redirect_uri,
        )

    def authorize_url(self) -> str:
        query = urlencode(
            {
                "client_id": self.client_id,
                "redirect_uri": self.redirect_uri,
                "response_type": "code",
            }
        )
        return f"{KAKAO_AUTHORIZE_URL}?{query}"

    def exchange_code(self, code: str) -> str:
        """
        Trade an authorization code for a provider access token.
        """
        data = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "code": code,
        }
        if self.client_secret:
            data["client_secret"] = self.client_secret
        try:
            resp = self.session.post(
                KAKAO_TOKEN_URL, data=data, timeout=HTTP_TIMEOUT_SECONDS
            )
            resp.raise_for_status()
            token = resp.json().get("access_token")
        except (requests.RequestException, ValueError) as e:
            logger.error("Kakao token exchange failed: %s", e)
            raise UpstreamError()
        if not token:
            raise UpstreamError()
        return token

    def fetch_profile(self, access_token: str) -> dict:
        """
        Returns {"id", "nickname", "email"}; nickname and email may be None.
        """
        try:
            resp = self.session.get(
                KAKAO_PROFILE_URL,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=HTTP_TIMEOUT_SECONDS,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Kakao profile fetch failed: %s", e)
            raise UpstreamError()

        if "id" not in data:
            raise UpstreamError()
        account = data.get("kakao_account") or {}
        profile = account.get("profile") or {}
        return {
            "id": str(data["id"]),
            "nickname": profile.get("nickname"),
            "email": account.get("email"),
        }

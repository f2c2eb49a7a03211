import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timezone

import requests

from storelease.errors import UpstreamError
from storelease.settings import Settings
from storelease.vars import COOLSMS_SEND_URL, HTTP_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class SmsClient:
    """
    CoolSMS REST (v4) sender.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        sender: str,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.api_secret = api_secret
        self.sender = sender
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmsClient":
        return cls(
            settings.coolsms_api_key,
            settings.coolsms_api_secret,
            settings.coolsms_sender_phone,
        )

    def auth_header(self) -> str:
        date = datetime.now(timezone.utc).isoformat()
        salt = secrets.token_hex(16)
        signature = hmac.new(
            self.api_secret.encode(), (date + salt).encode(), hashlib.sha256
        ).hexdigest()
        return (
            f"HMAC-SHA256 apiKey={self.api_key}, date={date}, "
            f"salt={salt}, signature={signature}"
        )

    def send(self, to: str, text: str) -> None:
        body = {"message": {"to": to, "from": self.sender, "text": text}}
        try:
            resp = self.session.post(
                COOLSMS_SEND_URL,
                json=body,
                headers={"Authorization": self.auth_header()},
                timeout=HTTP_TIMEOUT_SECONDS,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("SMS send failed: %s", e)
            raise UpstreamError()

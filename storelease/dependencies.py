"""
Accessors for the objects the composition root puts on app.state.
"""

from fastapi import Request

from storelease.clients.kakao import KakaoClient
from storelease.clients.sms import SmsClient
from storelease.clients.storage import StorageClient
from storelease.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> StorageClient:
    return request.app.state.storage


def get_sms(request: Request) -> SmsClient:
    return request.app.state.sms


def get_kakao(request: Request) -> KakaoClient:
    return request.app.state.kakao

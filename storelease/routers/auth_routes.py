"""
Routes for registration, login and Kakao social login
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storelease.clients.kakao import KakaoClient
from storelease.database import get_db
from storelease.dependencies import get_kakao, get_settings
from storelease.errors import AppError
from storelease.middleware.rbac import Principal, get_current_user
from storelease.schemas.auth import LoginSchema, RegisterSchema, TokenResponse, UserOut
from storelease.services import auth as auth_service
from storelease.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterSchema,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return auth_service.register(db, payload, settings)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginSchema,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return {"token": auth_service.login(db, payload, settings)}


@router.get("/me", response_model=UserOut)
def get_me(db: Session = Depends(get_db), user: Principal = Depends(get_current_user)):
    return auth_service.get_me(db, user.user_id)


@router.get("/kakao")
def redirect_to_kakao(kakao: KakaoClient = Depends(get_kakao)):
    """
    Send the browser to Kakao's consent page
    """
    return RedirectResponse(kakao.authorize_url())


@router.get("/kakao/callback")
def handle_kakao_callback(
    code: Optional[str] = None,
    db: Session = Depends(get_db),
    kakao: KakaoClient = Depends(get_kakao),
    settings: Settings = Depends(get_settings),
):
    """
    Finish Kakao login and hand the token to the web client
    """
    failure_url = f"{settings.web_origin}/login?error=social-login-failed"
    if not code:
        return RedirectResponse(failure_url)
    try:
        token = auth_service.handle_social_login(db, kakao, code, settings)
    except AppError as e:
        logger.warning("Kakao login failed: %s", e.message)
        return RedirectResponse(failure_url)
    except SQLAlchemyError:
        logger.exception("Kakao login failed while saving the account")
        return RedirectResponse(failure_url)
    return RedirectResponse(f"{settings.web_origin}/auth/social?{urlencode({'token': token})}")

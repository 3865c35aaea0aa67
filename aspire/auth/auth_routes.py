# aspire/auth/auth_routes.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response, status
from sqlalchemy.orm import Session

from ..config import Settings
from ..database import get_db
from ..deps import get_google_verifier, get_mailer, get_settings
from ..schemas import GoogleAuthIn, LoginIn, MessageOut, RegisterIn, SendOtpIn, SessionOut
from . import accounts
from .auth_utils import REFRESH_COOKIE, clear_refresh_cookie, set_refresh_cookie
from .otp import request_otp

router = APIRouter(tags=["auth"])


@router.post("/send-otp", response_model=MessageOut)
def send_otp(body: SendOtpIn, db: Session = Depends(get_db), mailer=Depends(get_mailer)):
    request_otp(db, mailer, body.email)
    return {"message": "OTP sent successfully to your email."}


@router.post("/register", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def register(body: RegisterIn, db: Session = Depends(get_db)):
    accounts.register(
        db,
        full_name=body.fullName,
        email=body.email,
        school=body.school,
        otp=body.otp,
    )
    return {"message": "Registration successful! You can now log in."}


@router.post("/login", response_model=SessionOut)
def login(body: LoginIn, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    token, user = accounts.login(db, settings, body.email)
    return {"accessToken": token, "user": accounts.session_user(user)}


@router.post("/google-auth", response_model=SessionOut)
def google_auth(
    body: GoogleAuthIn,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    verifier=Depends(get_google_verifier),
):
    access, refresh, user = accounts.google_login(db, settings, verifier, body.token)
    set_refresh_cookie(response, refresh, settings)
    return {"accessToken": access, "user": accounts.session_user(user)}


@router.post("/refresh", response_model=SessionOut)
def refresh(
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    token, user = accounts.refresh_session(db, settings, refresh_token)
    return {"accessToken": token, "user": accounts.session_user(user)}


@router.post("/logout", response_model=MessageOut)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_refresh_cookie(response, settings)
    return {"message": "Logged out."}

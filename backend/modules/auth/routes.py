"""
Auth API endpoints.

The storefront sends the user to Discord, Discord redirects back to the
storefront with a code, and the storefront posts that code here.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_login_service, get_session_manager

from .interfaces import ILoginService
from .models import SessionView
from .session import AuthSessionManager

router = APIRouter()


class LoginUrlResponse(BaseModel):
    """Where to send the browser to start a Discord login."""

    url: str


class CallbackRequest(BaseModel):
    """Query parameters Discord appended to the redirect."""

    code: Optional[str] = None
    error: Optional[str] = None
    state: Optional[str] = None


@router.get("/login", response_model=LoginUrlResponse)
async def get_login_url(
    state: Optional[str] = None,
    login: ILoginService = Depends(get_login_service),
) -> LoginUrlResponse:
    """Get the Discord consent URL."""
    return LoginUrlResponse(url=login.login_url(state))


@router.post("/callback", response_model=SessionView)
async def complete_login(
    request: CallbackRequest,
    login: ILoginService = Depends(get_login_service),
    session: AuthSessionManager = Depends(get_session_manager),
) -> SessionView:
    """
    Finish a Discord login.

    Returns 401 if the user cancelled or the exchange with Discord failed;
    the previous session is kept in that case.
    """
    await login.complete_login(request.code, request.error)
    return session.view()


@router.get("/session", response_model=SessionView)
def get_session(
    session: AuthSessionManager = Depends(get_session_manager),
) -> SessionView:
    """Get the current session (never includes the access token)."""
    return session.view()


@router.post("/logout", response_model=SessionView)
def logout(
    login: ILoginService = Depends(get_login_service),
    session: AuthSessionManager = Depends(get_session_manager),
) -> SessionView:
    """Log out."""
    login.logout()
    return session.view()

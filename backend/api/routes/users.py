"""
User-related endpoints.

Provides the signed-in user's account record and the admin user screens.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel

from modules.auth.session import AuthSessionManager
from modules.store.interfaces import IStore
from modules.store.models import MembershipType, Order, User
from modules.store.reports import export_users_csv, filter_users
from ..dependencies import get_session_manager, get_store

router = APIRouter()
admin_router = APIRouter()

EXPORT_FILENAME = "users.csv"


class MembershipUpdateRequest(BaseModel):
    """New membership tier for a user."""

    membership_type: MembershipType


def _current_user(session: AuthSessionManager, store: IStore) -> User:
    state = session.get_state()
    if not state.is_authenticated or state.user is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    user = store.get_user_by_discord_id(state.user.id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/me", response_model=User)
def get_current_user_profile(
    session: AuthSessionManager = Depends(get_session_manager),
    store: IStore = Depends(get_store),
) -> User:
    """
    Get the signed-in user's account record.

    Requires authentication.
    """
    return _current_user(session, store)


@router.get("/me/orders", response_model=list[Order])
def get_current_user_orders(
    session: AuthSessionManager = Depends(get_session_manager),
    store: IStore = Depends(get_store),
) -> list[Order]:
    """The signed-in user's orders, oldest first."""
    return store.get_orders_for_user(_current_user(session, store).id)


@admin_router.get("", response_model=list[User])
def list_users(
    search: Optional[str] = Query(default=None, description="Email or username fragment"),
    store: IStore = Depends(get_store),
) -> list[User]:
    """List users, optionally filtered by email or username."""
    return filter_users(store.get_all_users(), search)


@admin_router.get("/export")
def export_users(
    search: Optional[str] = Query(default=None, description="Email or username fragment"),
    store: IStore = Depends(get_store),
) -> Response:
    """Download users as CSV."""
    users = filter_users(store.get_all_users(), search)
    return Response(
        content=export_users_csv(users),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@admin_router.patch("/{user_id}/membership", response_model=User)
def update_membership(
    user_id: str,
    request: MembershipUpdateRequest,
    store: IStore = Depends(get_store),
) -> User:
    """Change a user's membership tier."""
    user = store.set_membership_type(user_id, request.membership_type)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user

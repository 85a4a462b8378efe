"""Request-scoped dependencies shared by the controllers."""

from typing import Optional

from fastapi import Header, Request

from src.models import CurrentUser

MASTER_ADMIN_ROLE = "master-admin"


def get_current_user(
    x_user_email: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> CurrentUser:
    """Identity forwarded by the auth proxy in front of the API."""
    return CurrentUser(
        email=x_user_email or None,
        is_master_admin=(x_user_role or "").lower() == MASTER_ADMIN_ROLE,
    )


def get_services(request: Request):
    return request.app.state.services

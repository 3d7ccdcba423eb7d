"""
Session dependencies shared by the routers

The bearer token maps to the SessionContext created at sign-in.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from wedding_wagers import state
from wedding_wagers.errors import PermissionDenied, Unauthenticated
from wedding_wagers.models import SessionContext


bearer = HTTPBearer(auto_error=False)


def optional_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer)
) -> Optional[SessionContext]:
    if credentials is None:
        return None
    return state.IDENTITY.get_session(credentials.credentials)


def current_session(context: Optional[SessionContext] = Depends(optional_session)) -> SessionContext:
    if context is None:
        raise Unauthenticated("You must be logged in.")
    return context


def admin_session(context: SessionContext = Depends(current_session)) -> SessionContext:
    if not context.is_admin:
        raise PermissionDenied("You do not have administrative privileges to perform this action.")
    return context

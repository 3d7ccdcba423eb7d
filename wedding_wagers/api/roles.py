"""Super-admin role endpoints"""
from typing import Optional

from fastapi import APIRouter, Depends

from wedding_wagers import state
from wedding_wagers.api.deps import optional_session
from wedding_wagers.models import RoleRequest, SessionContext
from wedding_wagers.services.admin_roles import grant_admin, revoke_admin


router = APIRouter(prefix="/roles", tags=["roles"])


@router.post("/grant-admin")
async def grant_admin_endpoint(request: RoleRequest, caller: Optional[SessionContext] = Depends(optional_session)):
    message = grant_admin(state.IDENTITY, state.CONFIG, caller, request.email)
    return {"message": message}


@router.post("/revoke-admin")
async def revoke_admin_endpoint(request: RoleRequest, caller: Optional[SessionContext] = Depends(optional_session)):
    message = revoke_admin(state.IDENTITY, state.CONFIG, caller, request.email)
    return {"message": message}

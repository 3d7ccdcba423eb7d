"""
Administrator role management

Only the super-admin e-mail named in deployment configuration may grant
or revoke the admin claim. The target's live sessions end, so the change
applies from their next sign-in.
"""
import logging
from typing import Optional

from wedding_wagers.errors import InvalidArgument, PermissionDenied, Unauthenticated
from wedding_wagers.identity import ADMIN_CLAIM, IdentityProvider, normalize_email
from wedding_wagers.models import AppConfig, SessionContext


logger = logging.getLogger(__name__)


def _set_admin_claim(
    identity: IdentityProvider,
    config: AppConfig,
    caller: Optional[SessionContext],
    email: Optional[str],
    is_admin: bool
) -> str:
    verb = "assign" if is_admin else "remove"
    if caller is None:
        raise Unauthenticated(f"Only authenticated users can {verb} admin roles.")

    super_admin = normalize_email(config.super_admin_email)
    if not super_admin or normalize_email(caller.email) != super_admin:
        logger.warning(f"Rejected admin {verb} by {caller.email}")
        raise PermissionDenied(f"You do not have permission to {verb} admin roles.")

    if not email or not email.strip():
        raise InvalidArgument("The function must be called with an email address.")

    user = identity.get_user_by_email(email)
    claims = dict(user.custom_claims)
    claims[ADMIN_CLAIM] = is_admin
    identity.set_custom_claims(user.uid, claims)
    logger.info(f"{caller.email} set admin={is_admin} for {user.email}")
    return user.email


def grant_admin(identity, config, caller, email) -> str:
    email = _set_admin_claim(identity, config, caller, email, True)
    return f"Success! {email} has been made an admin."


def revoke_admin(identity, config, caller, email) -> str:
    email = _set_admin_claim(identity, config, caller, email, False)
    return f"Success! {email} no longer has admin role."

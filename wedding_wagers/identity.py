"""
Identity provider

Sign-up with e-mail verification, sign-in/sign-out, custom claims and
auth-state notifications. Users and sessions live in memory.
"""
import logging
import re
import secrets
import uuid
from datetime import timedelta
from typing import Callable, Dict, List, Optional

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, InvalidHashError

from wedding_wagers.errors import Conflict, InvalidArgument, NotFound, Unauthenticated
from wedding_wagers.models import SessionContext, UserRecord, utc_now


logger = logging.getLogger(__name__)

PASSWORD_RULES = [
    (re.compile(r".{8,}"), "At least 8 characters"),
    (re.compile(r"[A-Z]"), "At least one uppercase letter"),
    (re.compile(r"[a-z]"), "At least one lowercase letter"),
    (re.compile(r"[0-9]"), "At least one number"),
    (re.compile(r"[^A-Za-z0-9]"), "At least one special character"),
]

ADMIN_CLAIM = "admin"

DEFAULT_SESSION_TTL = timedelta(hours=12)

# Called with (user_id, context); context is None on sign-out
AuthListener = Callable[[str, Optional[SessionContext]], None]

_password_hasher = PasswordHasher()


def unmet_password_rules(password: str) -> List[str]:
    """Messages for every password rule the password fails"""
    return [message for pattern, message in PASSWORD_RULES if not pattern.search(password)]


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class IdentityProvider:
    """Issues principals with a stable id and e-mail"""

    def __init__(self, session_ttl: timedelta = DEFAULT_SESSION_TTL):
        self.session_ttl = session_ttl
        self._users: Dict[str, UserRecord] = {}
        self._uid_by_email: Dict[str, str] = {}
        self._verification_tokens: Dict[str, str] = {}
        self._sessions: Dict[str, SessionContext] = {}
        self._listeners: List[AuthListener] = []

    # ==================== ACCOUNTS ====================

    def sign_up(self, email: str, password: str, display_name: str):
        """
        Create an unverified account

        Returns:
            (UserRecord, verification token)
        """
        email = normalize_email(email)
        display_name = (display_name or "").strip()
        if not email or "@" not in email:
            raise InvalidArgument("A valid email address is required.")
        if not display_name:
            raise InvalidArgument("Name is required.")
        if email in self._uid_by_email:
            raise Conflict("An account with this email already exists.")

        unmet = unmet_password_rules(password or "")
        if unmet:
            raise InvalidArgument("Password does not meet all requirements: " + ", ".join(unmet))

        user = UserRecord(
            uid=uuid.uuid4().hex,
            email=email,
            display_name=display_name,
            password_hash=_password_hasher.hash(password),
        )
        self._users[user.uid] = user
        self._uid_by_email[email] = user.uid

        token = secrets.token_urlsafe(24)
        self._verification_tokens[token] = user.uid
        logger.info(f"Signed up {email} ({user.uid})")
        return user, token

    def verify_email(self, token: str) -> UserRecord:
        uid = self._verification_tokens.pop(token, None)
        if uid is None:
            raise InvalidArgument("Invalid or expired verification link.")
        user = self._users[uid]
        user.email_verified = True
        logger.info(f"Verified email {user.email}")
        return user

    def get_user(self, uid: str) -> Optional[UserRecord]:
        return self._users.get(uid)

    def get_user_by_email(self, email: str) -> UserRecord:
        uid = self._uid_by_email.get(normalize_email(email))
        if uid is None:
            raise NotFound("No user found for the provided email address.")
        return self._users[uid]

    def set_custom_claims(self, uid: str, claims: Dict[str, bool]) -> int:
        """
        Replace a user's claims and end their live sessions

        Sessions carry the claims they were started with, so the user has
        to sign in again to pick up the new ones.

        Returns:
            Number of sessions ended
        """
        user = self._users.get(uid)
        if user is None:
            raise NotFound(f"No user with id {uid}")
        user.custom_claims = dict(claims)
        return self.end_sessions(uid)

    def end_sessions(self, uid: str) -> int:
        tokens = [token for token, ctx in self._sessions.items() if ctx.user_id == uid]
        for token in tokens:
            del self._sessions[token]
        if tokens:
            logger.info(f"Ended {len(tokens)} session(s) for {uid}")
            self._notify(uid, None)
        return len(tokens)

    def user_count(self) -> int:
        return len(self._users)

    # ==================== SESSIONS ====================

    def sign_in(self, email: str, password: str) -> SessionContext:
        uid = self._uid_by_email.get(normalize_email(email))
        user = self._users.get(uid) if uid else None
        if user is None or not self._check_password(user, password or ""):
            raise Unauthenticated("Invalid email or password.")
        if not user.email_verified:
            raise Unauthenticated(
                "Please verify your email address before logging in. "
                "Check your inbox for a verification link."
            )

        context = SessionContext(
            token=secrets.token_urlsafe(32),
            user_id=user.uid,
            email=user.email,
            display_name=user.display_name,
            is_admin=bool(user.custom_claims.get(ADMIN_CLAIM)),
        )
        self._drop_expired_sessions()
        self._sessions[context.token] = context
        logger.info(f"Signed in {user.email} (admin={context.is_admin})")
        self._notify(user.uid, context)
        return context

    def sign_out(self, token: str) -> None:
        context = self._sessions.pop(token, None)
        if context is None:
            raise Unauthenticated("Not signed in.")
        logger.info(f"Signed out {context.email}")
        self._notify(context.user_id, None)

    def get_session(self, token: Optional[str]) -> Optional[SessionContext]:
        if not token:
            return None
        context = self._sessions.get(token)
        if context is not None and self._expired(context):
            del self._sessions[token]
            self._notify(context.user_id, None)
            return None
        return context

    def session_count(self) -> int:
        return len(self._sessions)

    def _expired(self, context: SessionContext) -> bool:
        return utc_now() - context.started_at >= self.session_ttl

    def _drop_expired_sessions(self) -> None:
        for token, context in list(self._sessions.items()):
            if self._expired(context):
                del self._sessions[token]
                self._notify(context.user_id, None)

    def on_auth_state_changed(self, listener: AuthListener) -> Callable[[], None]:
        """Register a sign-in/sign-out listener; returns a cancel function"""
        self._listeners.append(listener)

        def cancel() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return cancel

    @staticmethod
    def _check_password(user: UserRecord, password: str) -> bool:
        try:
            return _password_hasher.verify(user.password_hash, password)
        except (VerificationError, InvalidHashError):
            return False

    def _notify(self, user_id: str, context: Optional[SessionContext]) -> None:
        for listener in list(self._listeners):
            try:
                listener(user_id, context)
            except Exception as e:
                logger.error(f"Auth listener failed: {type(e).__name__}: {e}", exc_info=True)

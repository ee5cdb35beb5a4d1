"""Session provider: credential state and role resolution.

A :class:`SessionContext` is created when a user signs up or signs in (or
when a bearer token is resolved on a request) and is handed explicitly to
the services that need an identity. Signing out revokes the server-side
auth session and clears the context's role.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.auth.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    new_session_id,
    verify_password,
)
from app.logger import get_logger
from app.models.profile import Profile
from app.models.user import AuthSession, User
from app.services.errors import AlreadyRegistered, AuthError

log = get_logger("auth.session")

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


@dataclass
class SessionContext:
    user_id: int
    email: str
    session_id: str
    access_token: str
    role: Optional[str] = None
    active: bool = True

    @property
    def is_producer(self) -> bool:
        return self.role == "producer"


Listener = Callable[[str, SessionContext], None]


class SessionProvider:
    def __init__(self, db: Session, listeners: Optional[List[Listener]] = None):
        self.db = db
        self._listeners: List[Listener] = list(listeners or [])

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a session-change listener; returns the unsubscribe call."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str, context: SessionContext):
        for listener in list(self._listeners):
            listener(event, context)

    def sign_up(self, email: str, password: str, role: str, full_name: Optional[str] = None) -> SessionContext:
        """Create the auth identity and its profile in one transaction.

        Calling it again for an identity whose profile is missing (and with
        the right password) completes the profile step instead of failing.
        """
        user = self.db.query(User).filter(User.email == email).first()
        if user is not None:
            if user.profile is not None or not verify_password(password, user.hashed_password):
                raise AlreadyRegistered()
            log.warning("Completing missing profile for user %s", user.id)
            self.db.add(Profile(id=user.id, role=user.signup_role or role, full_name=full_name))
            self.db.commit()
            return self._open_session(user)

        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            signup_role=role,
        )
        try:
            self.db.add(user)
            self.db.flush()
            self.db.add(Profile(id=user.id, role=role, full_name=full_name))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            log.info("Sign-up rejected for %s: %s", email, e.orig)
            raise AlreadyRegistered()
        self.db.refresh(user)
        log.info("Signed up user %s as %s", user.id, role)
        return self._open_session(user)

    def sign_in(self, email: str, password: str) -> SessionContext:
        user = self.db.query(User).filter(User.email == email).first()
        if not user or not verify_password(password, user.hashed_password):
            raise AuthError()
        if not user.is_active:
            raise AuthError("Inactive user")

        if user.profile is None and user.signup_role:
            log.warning("Recreating missing profile for user %s from sign-up metadata", user.id)
            self.db.add(Profile(id=user.id, role=user.signup_role))
            self.db.commit()
            self.db.refresh(user)

        return self._open_session(user)

    def sign_out(self, context: SessionContext):
        auth_session = self.db.get(AuthSession, context.session_id)
        if auth_session is not None and auth_session.revoked_at is None:
            auth_session.revoked_at = datetime.now(timezone.utc)
            self.db.commit()
        context.role = None
        context.active = False
        log.info("Signed out user %s", context.user_id)
        self._notify(SIGNED_OUT, context)

    def resolve(self, token: str) -> Optional[SessionContext]:
        """Turn a bearer token into a live session, or None."""
        data = decode_access_token(token)
        if data is None:
            return None

        auth_session = self.db.get(AuthSession, data.session_id)
        if auth_session is None or auth_session.revoked_at is not None:
            return None
        if auth_session.user_id != data.user_id:
            return None

        user = self.db.get(User, data.user_id)
        if user is None or not user.is_active:
            return None

        return SessionContext(
            user_id=user.id,
            email=user.email,
            session_id=auth_session.id,
            access_token=token,
            role=self.resolve_role(user.id),
        )

    def resolve_role(self, user_id: int) -> Optional[str]:
        try:
            profile = self.db.get(Profile, user_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            log.error("Error fetching user role for %s: %s", user_id, e)
            return None
        if profile is None:
            log.warning("No profile for user %s; role unresolved", user_id)
            return None
        return profile.role

    def _open_session(self, user: User) -> SessionContext:
        sid = new_session_id()
        self.db.add(AuthSession(id=sid, user_id=user.id))
        self.db.commit()

        token = create_access_token(data={"sub": str(user.id), "sid": sid})
        context = SessionContext(
            user_id=user.id,
            email=user.email,
            session_id=sid,
            access_token=token,
            role=self.resolve_role(user.id),
        )
        self._notify(SIGNED_IN, context)
        return context

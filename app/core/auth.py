"""
Authentication port and its adapters.

Ledger code only ever sees an `AuthUser` (or None) through the FastAPI
dependencies at the bottom of this module; it never checks credentials itself.
"""
import logging
import secrets
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGO, JWT_SECRET
from app.core.errors import LedgerError

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


class AuthError(LedgerError):
    status_code = 401


@dataclass
class AuthUser:
    email: str
    full_name: Optional[str] = None
    user_id: Optional[int] = None


@dataclass
class AuthSession:
    access_token: str
    user: AuthUser
    token_type: str = "bearer"


AuthListener = Callable[[str, Optional[AuthSession]], None]


def _to_bcrypt_secret(password: str) -> bytes:
    # bcrypt only uses the first 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_to_bcrypt_secret(password), bcrypt.gensalt(rounds=12)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_to_bcrypt_secret(password), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


class AuthProvider(ABC):
    def __init__(self):
        self._listeners: list[AuthListener] = []

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthSession:
        """Raises AuthError on bad credentials."""

    @abstractmethod
    def sign_out(self, token: str) -> None:
        ...

    @abstractmethod
    def get_current_user(self, token: str) -> Optional[AuthUser]:
        ...

    def on_auth_state_change(self, callback: AuthListener) -> Callable[[], None]:
        """Register a listener; returns the unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _emit(self, event: str, session: Optional[AuthSession]) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, session)
            except Exception:
                logger.exception("auth listener failed on %s", event)


class InMemoryAuthProvider(AuthProvider):
    """Test double: plain email -> password map, opaque random tokens."""

    def __init__(self, users: dict[str, str]):
        super().__init__()
        self._users = {email.lower(): pw for email, pw in users.items()}
        self._tokens: dict[str, AuthUser] = {}

    def sign_in(self, email: str, password: str) -> AuthSession:
        email = email.strip().lower()
        if self._users.get(email) != password:
            raise AuthError("Invalid email or password")
        token = secrets.token_urlsafe(24)
        user = AuthUser(email=email)
        self._tokens[token] = user
        session = AuthSession(access_token=token, user=user)
        self._emit(SIGNED_IN, session)
        return session

    def sign_out(self, token: str) -> None:
        if self._tokens.pop(token, None) is not None:
            self._emit(SIGNED_OUT, None)

    def get_current_user(self, token: str) -> Optional[AuthUser]:
        return self._tokens.get(token)


class DatabaseAuthProvider(AuthProvider):
    """Staff accounts from `staff_users` (bcrypt), stateless JWT access tokens."""

    def __init__(self, session_factory, secret: str = JWT_SECRET, algorithm: str = JWT_ALGO,
                 expire_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES):
        super().__init__()
        self._session_factory = session_factory
        self._secret = secret
        self._algorithm = algorithm
        self._expire = timedelta(minutes=expire_minutes)
        # jti -> exp; an expired token is refused by decode, so its entry can go
        self._revoked: dict[str, int] = {}

    def _load_user(self, db, email: str):
        from app.models.user_model import StaffUser

        return (
            db.query(StaffUser)
            .filter(StaffUser.email == email, StaffUser.is_active.is_(True))
            .first()
        )

    def sign_in(self, email: str, password: str) -> AuthSession:
        email = email.strip().lower()
        db = self._session_factory()
        try:
            row = self._load_user(db, email)
            if not row or not verify_password(password, row.password_hash):
                logger.info("sign-in refused for %s", email)
                raise AuthError("Invalid email or password")

            row.last_login_on = datetime.now()
            db.commit()
            user = AuthUser(email=row.email, full_name=row.full_name, user_id=row.user_id)
        finally:
            db.close()

        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": user.email, "uid": user.user_id, "jti": uuid.uuid4().hex, "iat": now, "exp": now + self._expire},
            self._secret,
            algorithm=self._algorithm,
        )
        session = AuthSession(access_token=token, user=user)
        self._emit(SIGNED_IN, session)
        return session

    def _decode(self, token: str) -> Optional[dict]:
        try:
            return jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.PyJWTError:
            return None

    def _prune_revoked(self) -> None:
        now = datetime.now(timezone.utc).timestamp()
        for jti in [j for j, exp in self._revoked.items() if exp <= now]:
            del self._revoked[jti]

    def sign_out(self, token: str) -> None:
        claims = self._decode(token)
        if claims:
            self._prune_revoked()
            self._revoked[claims["jti"]] = claims["exp"]
            self._emit(SIGNED_OUT, None)

    def get_current_user(self, token: str) -> Optional[AuthUser]:
        claims = self._decode(token)
        if not claims or claims.get("jti") in self._revoked:
            return None

        db = self._session_factory()
        try:
            row = self._load_user(db, claims["sub"])
            if not row:
                return None
            return AuthUser(email=row.email, full_name=row.full_name, user_id=row.user_id)
        finally:
            db.close()


# ------------------------------
# FastAPI dependencies
# ------------------------------
_provider: Optional[AuthProvider] = None
_bearer = HTTPBearer(auto_error=False)


def get_auth_provider() -> AuthProvider:
    global _provider
    if _provider is None:
        from app.utils.database import SessionLocal

        _provider = DatabaseAuthProvider(SessionLocal)
    return _provider


def get_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_optional_user(
        token: Optional[str] = Depends(get_token),
        provider: AuthProvider = Depends(get_auth_provider),
) -> Optional[AuthUser]:
    if not token:
        return None
    return provider.get_current_user(token)


def get_current_user(user: Optional[AuthUser] = Depends(get_optional_user)) -> AuthUser:
    if user is None:
        raise AuthError("Not authenticated")
    return user


def get_actor(user: Optional[AuthUser] = Depends(get_optional_user)) -> Optional[str]:
    """Email stamped on records as recorded_by / granted_by / changed_by."""
    return user.email if user else None

"""Identity provider: accounts, password hashing and signed session tokens.

Resource handlers never talk to this module directly. They receive a
``RequestContext`` resolved by ``src.api.dependencies`` and only read the
user id from it.
"""

import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.exceptions import ValidationError
from src.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str
    name: str | None = None


@dataclass(frozen=True)
class AuthSession:
    id: str
    user_id: str
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class RequestContext:
    """Identity attached to a single request. Both fields are None when anonymous."""

    user: AuthUser | None = None
    session: AuthSession | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


ANONYMOUS = RequestContext()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def extract_session_token(
    headers: Mapping[str, str], cookies: Mapping[str, str], cookie_name: str
) -> str | None:
    """Pull the session token from a Bearer header, falling back to the cookie."""
    authorization = headers.get("authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return cookies.get(cookie_name) or None


class IdentityProvider:
    """Issues and validates sessions for email and password accounts."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def create_session(self, user: User) -> AuthSession:
        """Sign a new session token for ``user``."""
        expires_at = datetime.now(UTC) + timedelta(
            minutes=self.settings.session_expiration_minutes
        )
        session_id = uuid.uuid4().hex
        claims = {
            "sub": user.id,
            "sid": session_id,
            "email": user.email,
            "exp": expires_at,
        }
        token = jwt.encode(
            claims, self.settings.session_secret, algorithm=self.settings.session_algorithm
        )
        return AuthSession(id=session_id, user_id=user.id, token=token, expires_at=expires_at)

    def decode_session_token(self, token: str) -> dict | None:
        """Decode and validate a session token."""
        try:
            return jwt.decode(
                token,
                self.settings.session_secret,
                algorithms=[self.settings.session_algorithm],
            )
        except JWTError as e:
            logger.debug(f"Rejected session token: {e}")
            return None

    def validate_session(
        self, headers: Mapping[str, str], cookies: Mapping[str, str]
    ) -> RequestContext | None:
        """Resolve the identity behind the request's session token, if any."""
        token = extract_session_token(headers, cookies, self.settings.session_cookie_name)
        if token is None:
            return None

        payload = self.decode_session_token(token)
        if payload is None:
            return None

        user_id = payload.get("sub")
        session_id = payload.get("sid")
        expires = payload.get("exp")
        if not user_id or not session_id or expires is None:
            return None

        user = self.db.query(User).filter(User.id == str(user_id)).first()
        if user is None:
            logger.debug(f"Session {session_id} refers to a missing user")
            return None

        return RequestContext(
            user=AuthUser(id=user.id, email=user.email, name=user.name),
            session=AuthSession(
                id=session_id,
                user_id=user.id,
                token=token,
                expires_at=datetime.fromtimestamp(expires, UTC),
            ),
        )

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email.lower()).first()

    def sign_up(
        self, email: str, password: str, name: str | None = None
    ) -> tuple[User, AuthSession]:
        """Create an account and open a session for it."""
        if self.get_user_by_email(email):
            raise ValidationError("Email already registered")

        user = User(email=email.lower(), password_hash=get_password_hash(password), name=name)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user, self.create_session(user)

    def sign_in(self, email: str, password: str) -> tuple[User, AuthSession] | None:
        """Authenticate by email and password. Returns None on bad credentials."""
        user = self.get_user_by_email(email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user, self.create_session(user)

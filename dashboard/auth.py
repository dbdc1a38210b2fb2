# dashboard/auth.py
"""
Identity providers.

`authenticate` only talks to the `IdentityProvider` protocol. The bundled
`CredentialsProvider` checks an email/password pair against the users table.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from pydantic import BaseModel, EmailStr, Field, ValidationError
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from dashboard.db.engine import get_engine
from dashboard.db.schema import users
from dashboard.exceptions import AuthError, CredentialsSignin

logger = logging.getLogger(__name__)

password_hasher = PasswordHasher()


class IdentityProvider(Protocol):
    def sign_in(self, provider: str, credentials: Mapping[str, Any]) -> Dict[str, Any]:
        """Return the signed-in user or raise AuthError."""
        ...


class Credentials(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


def hash_password(password: str) -> str:
    return password_hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return password_hasher.verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False


class CredentialsProvider:
    """Email/password sign-in backed by the users table."""

    provider_id = "credentials"

    def __init__(self, engine: Optional[Engine] = None) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine or get_engine()

    def get_user(self, email: str) -> Optional[Dict[str, Any]]:
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    select(users.c.id, users.c.name, users.c.email, users.c.password)
                    .where(users.c.email == email)
                ).mappings().first()
        except SQLAlchemyError as e:
            logger.warning("Failed to fetch user: %s", e.__class__.__name__)
            raise AuthError("CallbackRouteError", "Failed to fetch user.") from e
        return dict(row) if row is not None else None

    def sign_in(self, provider: str, credentials: Mapping[str, Any]) -> Dict[str, Any]:
        if provider != self.provider_id:
            raise AuthError("Configuration", f"Unknown provider {provider!r}")

        try:
            parsed = Credentials(
                email=credentials.get("email"),
                password=credentials.get("password"),
            )
        except ValidationError:
            raise CredentialsSignin("Malformed credentials")

        user = self.get_user(parsed.email)
        if user is None or not verify_password(parsed.password, user["password"]):
            logger.warning("Failed sign-in attempt")
            raise CredentialsSignin()

        logger.info("User %s signed in", user["id"])
        return {"id": user["id"], "name": user["name"], "email": user["email"]}

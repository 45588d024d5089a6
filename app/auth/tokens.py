from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt, JWTError, ExpiredSignatureError

from app.core.errors import UnauthorizedError
from app.core.settings import Settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class InvalidTokenError(UnauthorizedError):
    default_message = "Invalid token"


class TokenIssuer:
    """
    Emite și verifică JWT-uri HS256 pe baza cheii simetrice din configurație.

    Token-ul conține o singură identitate (`sub` = username), plus `iss`, `aud`,
    `iat` și `exp` (JWT_EXPIRE_MINUTES, implicit 30). Fără refresh și fără revocare.
    Apelantul verifică credențialele ÎNAINTE de `generate_access_token`.
    """

    def __init__(self, settings: Settings):
        self._key = settings.JWT_KEY
        self.issuer = settings.JWT_ISSUER
        self.audience = settings.JWT_AUDIENCE
        self.expires_in = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
        self.leeway = settings.JWT_LEEWAY_SECONDS

    def generate_access_token(self, username: str) -> str:
        logger.info("Generating JWT access token for user: %s", username)
        now = datetime.now(timezone.utc)
        claims: Dict[str, Any] = {
            "sub": username,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": int(now.timestamp()),
            "exp": int((now + self.expires_in).timestamp()),
        }
        try:
            return jwt.encode(claims, self._key, algorithm=ALGORITHM)
        except JWTError:
            logger.exception("Error generating access token for user: %s", username)
            raise

    def decode_access_token(self, token: str) -> Dict[str, Any]:
        """
        Verifică semnătura, expirarea, issuer-ul și audience-ul.
        Ridică InvalidTokenError (401) la orice problemă.
        """
        try:
            payload = jwt.decode(
                token,
                self._key,
                algorithms=[ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                options={"leeway": self.leeway},
            )
        except ExpiredSignatureError:
            logger.warning("JWT token has expired")
            raise InvalidTokenError("Token has expired")
        except JWTError as e:
            logger.warning("JWT validation failed: %s", e)
            raise InvalidTokenError("Invalid token")

        if not payload.get("sub"):
            logger.warning("JWT token missing 'sub' claim")
            raise InvalidTokenError("Invalid token: missing subject")
        return payload

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.auth.credentials import CredentialVerifier
from app.auth.tokens import TokenIssuer
from app.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

# auto_error=False: lipsa header-ului o tratăm noi (401 în plicul standard, nu 403)
security = HTTPBearer(auto_error=False)


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_credential_verifier(request: Request) -> CredentialVerifier:
    return request.app.state.credential_verifier


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> str:
    """
    Extrage și validează Bearer token-ul; întoarce username-ul (claim `sub`).

    Usage:
        @router.get("/protected")
        def protected(user: str = Depends(get_current_user)): ...
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token")

    payload = issuer.decode_access_token(credentials.credentials)
    user = payload["sub"]
    logger.debug("Authenticated user: %s", user)
    return user

# app/routers/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.auth.credentials import CredentialVerifier
from app.auth.dependencies import get_credential_verifier, get_token_issuer
from app.auth.tokens import TokenIssuer
from app.core import responses
from app.core.errors import UnauthorizedError
from app.schemas.auth import LoginRequest
from app.schemas.common import ResponseEnvelope, TokenData

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=ResponseEnvelope[TokenData],
    summary="Exchange username/password for a bearer token",
    responses={401: {"model": ResponseEnvelope[None], "description": "Invalid credentials"}},
)
def login(
    payload: LoginRequest,
    verifier: CredentialVerifier = Depends(get_credential_verifier),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    logger.info("Login attempt for user: %s", payload.username)
    if not verifier.verify(payload.username, payload.password):
        logger.warning("Login failed for user: %s. Invalid credentials.", payload.username)
        raise UnauthorizedError("Invalid credentials")

    token = issuer.generate_access_token(payload.username)
    logger.info("User %s logged in successfully. JWT generated.", payload.username)
    return responses.ok({"token": token}, "Login successful")

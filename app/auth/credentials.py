from __future__ import annotations

import hmac
from typing import Protocol, runtime_checkable

from app.core.settings import Settings


@runtime_checkable
class CredentialVerifier(Protocol):
    """Orice obiect cu `verify(username, password) -> bool` poate păzi /auth/login."""

    def verify(self, username: str, password: str) -> bool: ...


class StaticCredentialVerifier:
    """O singură pereche user/parolă, din configurație."""

    def __init__(self, username: str, password: str):
        self._username = username.encode("utf-8")
        self._password = password.encode("utf-8")

    @classmethod
    def from_settings(cls, settings: Settings) -> "StaticCredentialVerifier":
        return cls(settings.AUTH_USERNAME, settings.AUTH_PASSWORD)

    def verify(self, username: str, password: str) -> bool:
        # comparăm ambele câmpuri mereu (timp constant, fără scurtcircuit)
        user_ok = hmac.compare_digest(username.encode("utf-8"), self._username)
        pass_ok = hmac.compare_digest(password.encode("utf-8"), self._password)
        return user_ok and pass_ok

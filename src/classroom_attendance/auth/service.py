from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash

from ..core.exceptions import AuthenticationError


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    name: str
    email: str


class AuthService:
    """Use case: check the single configured teacher login."""

    def __init__(self, *, name: str, email: str, password_hash: str):
        self._name = name
        self._email = email
        self._password_hash = password_hash

    def authenticate(self, name: str, email: str, password: str) -> SessionUser:
        if not self._password_hash or name != self._name or email != self._email:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(self._password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            raise AuthenticationError("Invalid credentials")
        return SessionUser(name=name, email=email)

"""Signed, stateless session tokens.

A token is a ``django.core.signing`` payload carrying the user id, username,
role and an absolute expiry. The server keeps no session table: a token is
valid exactly when its signature matches and it has not expired.
"""
import time
from dataclasses import dataclass

from django.conf import settings
from django.core import signing

from .models import Role

TOKEN_SALT = "academy.session"


class InvalidToken(Exception):
    pass


class TokenExpired(InvalidToken):
    pass


@dataclass(frozen=True)
class Claim:
    user_id: int
    username: str
    role: str
    exp: int

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def _ttl_seconds() -> int:
    return int(settings.TOKEN_TTL.total_seconds())


def issue_token(user_id: int, username: str, role: str, *, now: float | None = None) -> str:
    issued_at = time.time() if now is None else now
    payload = {
        "id": user_id,
        "username": username,
        "role": str(role),
        "exp": int(issued_at) + _ttl_seconds(),
    }
    return signing.dumps(payload, key=settings.TOKEN_SECRET_KEY, salt=TOKEN_SALT, compress=True)


def verify_token(token: str, *, now: float | None = None) -> Claim:
    try:
        payload = signing.loads(token, key=settings.TOKEN_SECRET_KEY, salt=TOKEN_SALT)
    except signing.BadSignature as e:
        raise InvalidToken("Bad signature") from e
    except (ValueError, UnicodeDecodeError) as e:
        raise InvalidToken("Malformed token") from e

    if not isinstance(payload, dict):
        raise InvalidToken("Malformed token")
    user_id = payload.get("id")
    username = payload.get("username")
    role = payload.get("role")
    exp = payload.get("exp")
    if not isinstance(user_id, int) or not isinstance(username, str) or not isinstance(exp, int):
        raise InvalidToken("Malformed token")
    if role not in Role.values:
        raise InvalidToken("Unknown role")

    current = time.time() if now is None else now
    if exp <= current:
        raise TokenExpired("Token expired")
    return Claim(user_id=user_id, username=username, role=role, exp=exp)

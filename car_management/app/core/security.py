"""
Выдача и проверка JWT-токенов (Token Gate).

Токены stateless: в БД ничего не хранится. Подписываем текущим ключом,
проверяем текущим и, при ротации, предыдущими ключами из настроек.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JOSEError

from .config import settings
from .errors import SigningError, Unauthenticated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Идентичность из проверенного токена. Передаётся в сервисы явно."""

    username: str
    issued_at: datetime
    expires_at: datetime


class TokenGate:
    def __init__(
        self,
        secret_key: str,
        *,
        previous_keys: Sequence[str] = (),
        algorithm: str = "HS256",
        expire_hours: int = 24,
        username: str = "",
        password: str = "",
    ):
        self._secret_key = secret_key
        self._previous_keys = tuple(k for k in previous_keys if k)
        self._algorithm = algorithm
        self._ttl = timedelta(hours=expire_hours)
        self._username = username
        self._password = password

    @classmethod
    def from_settings(cls) -> "TokenGate":
        return cls(
            settings.JWT_SECRET_KEY,
            previous_keys=settings.JWT_PREVIOUS_SECRET_KEYS,
            algorithm=settings.JWT_ALGORITHM,
            expire_hours=settings.ACCESS_TOKEN_EXPIRE_HOURS,
            username=settings.AUTH_USERNAME,
            password=settings.AUTH_PASSWORD,
        )

    def check_credentials(self, username: str, password: str) -> bool:
        """Сверка с единственной парой логин/пароль из конфига."""
        user_ok = hmac.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        pass_ok = hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))
        return bool(self._username) and user_ok and pass_ok

    def expires_at(self, issued_at: datetime) -> datetime:
        return issued_at + self._ttl

    def issue(self, identity: str, now: Optional[datetime] = None) -> str:
        if not self._secret_key:
            raise SigningError("Signing key is not configured")

        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": identity,
            "iat": int(issued_at.timestamp()),
            "exp": int(self.expires_at(issued_at).timestamp()),
        }
        try:
            return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)
        except JOSEError as e:
            logger.error("Failed to sign token for %s: %s", identity, e)
            raise SigningError("Failed to generate token") from e

    def verify(self, token: Optional[str]) -> Principal:
        if not token:
            raise Unauthenticated("Authorization token required")

        payload = None
        for key in (self._secret_key, *self._previous_keys):
            try:
                payload = jwt.decode(
                    token,
                    key,
                    algorithms=[self._algorithm],
                    options={"require_exp": True},
                )
                break
            except ExpiredSignatureError:
                # подпись сошлась, но срок вышел
                raise Unauthenticated("Token expired")
            except JOSEError:
                continue

        if payload is None:
            raise Unauthenticated("Invalid token")

        username = payload.get("sub")
        if not username:
            raise Unauthenticated("Invalid token")

        return Principal(
            username=username,
            issued_at=datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )

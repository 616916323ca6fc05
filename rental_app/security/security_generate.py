import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt

from core.settings import settings
from models.enums import TokenType


class TokenGenerate:
    def _encode(self, user_id: uuid.UUID | str, token_type: TokenType, ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        return jwt.encode(
            {
                "sub": str(user_id),
                "type": token_type.value,
                "iat": now,
                "exp": now + ttl,
                "jti": uuid.uuid4().hex,
            },
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )

    def access_token(self, user_id: uuid.UUID | str) -> str:
        return self._encode(
            user_id,
            TokenType.ACCESS,
            timedelta(minutes=settings.ACCESS_EXPIRE_MINUTES),
        )

    def refresh_token(self, user_id: uuid.UUID | str) -> str:
        return self._encode(
            user_id,
            TokenType.REFRESH,
            timedelta(days=settings.REFRESH_EXPIRE_DAYS),
        )


token_generate = TokenGenerate()

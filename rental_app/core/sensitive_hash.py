import hashlib

from core.settings import settings


class SensitiveHash:
    @staticmethod
    def hash_ssn(ssn: str | None) -> str | None:
        if not ssn:
            return None
        normalized = "".join(ch for ch in ssn if ch.isdigit()).encode()
        salted = settings.SECRET_KEY.encode() + normalized
        return hashlib.sha256(salted).hexdigest()

"""Bearer token creation and verification.

Tokens look like JWTs (header.payload.signature) but use standard base64
segments and, by default, verification only parses the payload: neither the
signature nor `exp` is checked. Set TOKEN_VERIFY_SIGNATURE=true to enforce both.
"""

import base64
import json
import logging
import time
from functools import lru_cache
from typing import Any

from jwt.algorithms import HMACAlgorithm

from app.core.config import settings

logger = logging.getLogger(__name__)

TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}


def _now() -> int:
    return int(time.time())


def _json_segment(obj: dict[str, Any]) -> str:
    raw = json.dumps(obj, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def _b64decode(segment: str) -> bytes:
    """Decode standard or URL-safe base64, with or without padding."""
    s = segment.replace("-", "+").replace("_", "/")
    s += "=" * (-len(s) % 4)
    return base64.b64decode(s)


def format_duration(seconds: int) -> str:
    """Human readable lifetime, e.g. 3600 -> '1 hour'."""
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds % size == 0:
            count = seconds // size
            return f"{count} {unit}" if count == 1 else f"{count} {unit}s"
    return f"{seconds} seconds"


class TokenService:
    """Issues and verifies bearer tokens bound to a subject (user id)."""

    def __init__(
        self,
        secret: str,
        expires_in: int = 3600,
        verify_signature: bool = False,
    ) -> None:
        self._algorithm = HMACAlgorithm(HMACAlgorithm.SHA256)
        self._key = self._algorithm.prepare_key(secret)
        self.expires_in = expires_in
        self.verify_signature = verify_signature

    @property
    def expires_in_label(self) -> str:
        return format_duration(self.expires_in)

    def _sign(self, signing_input: str) -> str:
        digest = self._algorithm.sign(signing_input.encode("utf-8"), self._key)
        return base64.b64encode(digest).decode("ascii")

    def issue(self, subject_id: Any) -> str:
        """Create a token with sub, iat and exp (iat + expires_in)."""
        now = _now()
        payload = {"sub": subject_id, "iat": now, "exp": now + self.expires_in}
        signing_input = f"{_json_segment(TOKEN_HEADER)}.{_json_segment(payload)}"
        return f"{signing_input}.{self._sign(signing_input)}"

    def verify(self, token: Any) -> Any | None:
        """
        Return the token's subject, or None if the token is unusable.

        Unusable means: absent or not a string, not exactly three dot-separated
        segments, or a payload that does not decode to a JSON object with `sub`.
        """
        if not token or not isinstance(token, str):
            return None
        parts = token.split(".")
        if len(parts) != 3:
            return None
        try:
            payload = json.loads(_b64decode(parts[1]))
        except ValueError as e:
            logger.warning("Rejected token with undecodable payload: %s", e)
            return None
        if not isinstance(payload, dict):
            return None
        sub = payload.get("sub")
        # JSON true would otherwise equal user id 1; 0, false and "" are not subjects.
        if isinstance(sub, bool) or not sub:
            return None
        if self.verify_signature and not self._check_signature_and_expiry(parts, payload):
            return None
        return sub

    def _check_signature_and_expiry(
        self, parts: list[str], payload: dict[str, Any]
    ) -> bool:
        signing_input = f"{parts[0]}.{parts[1]}".encode("utf-8")
        try:
            signature = _b64decode(parts[2])
        except ValueError:
            return False
        if not self._algorithm.verify(signing_input, self._key, signature):
            logger.warning("Rejected token with bad signature")
            return False
        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)) or exp < _now():
            logger.warning("Rejected expired token", extra={"sub": payload.get("sub")})
            return False
        return True


@lru_cache
def get_token_service() -> TokenService:
    """Dependency returning a TokenService configured from settings."""
    return TokenService(
        secret=settings.TOKEN_SECRET.get_secret_value(),
        expires_in=settings.TOKEN_EXPIRE_SECONDS,
        verify_signature=settings.TOKEN_VERIFY_SIGNATURE,
    )

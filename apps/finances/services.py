"""Payment gateway helpers."""

from __future__ import annotations

import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)


def sign_payload(body: bytes, secret: str) -> str:
    """Hex HMAC-SHA256 of a raw request body."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_webhook_signature(body: bytes, signature: str | None, secret: str) -> bool:
    """Check the gateway signature of a webhook body."""
    if not signature:
        logger.warning("Payment webhook arrived without a signature")
        return False
    expected = sign_payload(body, secret)
    return hmac.compare_digest(expected, signature.strip().lower())

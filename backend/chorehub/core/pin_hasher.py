"""Pin Hasher — salted Argon2id credentials for numeric household pins.

Invariants:
    - Credential = base64(salt[16] || hash[32]); the pin is never stored
    - A fresh random salt per credential
    - verify_pin never raises: any decode, length or type problem is False
    - Comparison is constant time (hmac.compare_digest)
    - Verification must use the same cost parameters the credential was made
      with; the credential format carries no parameter header

Design Decisions:
    - argon2 low-level raw hash instead of PasswordHasher's encoded string:
      the credential stays an opaque salt+hash blob
    - Synchronous and CPU-bound; callers on the event loop offload it to a thread
"""

import base64
import binascii
import hmac
import logging
import secrets
from dataclasses import dataclass

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

logger = logging.getLogger(__name__)

SALT_SIZE = 16
HASH_SIZE = 32


@dataclass(frozen=True)
class PinHashParams:
    """Argon2id cost parameters (memory_cost in KiB)."""
    time_cost: int = 3
    memory_cost: int = 65536
    parallelism: int = 1


DEFAULT_PIN_HASH_PARAMS = PinHashParams()


def _derive(pin: int, salt: bytes, params: PinHashParams) -> bytes:
    return hash_secret_raw(
        secret=str(pin).encode("ascii"),
        salt=salt,
        time_cost=params.time_cost,
        memory_cost=params.memory_cost,
        parallelism=params.parallelism,
        hash_len=HASH_SIZE,
        type=Type.ID,
    )


def create_pin_credential(
    pin: int, params: PinHashParams = DEFAULT_PIN_HASH_PARAMS,
) -> str:
    """Hash a pin with a fresh salt into an opaque credential string."""
    if isinstance(pin, bool) or not isinstance(pin, int) or pin < 0:
        raise ValueError("pin must be a non-negative integer")
    salt = secrets.token_bytes(SALT_SIZE)
    return base64.b64encode(salt + _derive(pin, salt, params)).decode("ascii")


def verify_pin(
    pin: int, credential: str, params: PinHashParams = DEFAULT_PIN_HASH_PARAMS,
) -> bool:
    """True only when `pin` produced `credential`. Never raises."""
    if isinstance(pin, bool) or not isinstance(pin, int) or pin < 0:
        return False
    try:
        raw = base64.b64decode(credential, validate=True)
    except (binascii.Error, ValueError, TypeError):
        logger.debug("Pin credential is not valid base64")
        return False
    if len(raw) != SALT_SIZE + HASH_SIZE:
        logger.debug("Pin credential has unexpected length %d", len(raw))
        return False

    salt, stored = raw[:SALT_SIZE], raw[SALT_SIZE:]
    try:
        computed = _derive(pin, salt, params)
    except HashingError as e:
        logger.warning("Pin verification hashing failed: %s", e)
        return False
    return hmac.compare_digest(stored, computed)

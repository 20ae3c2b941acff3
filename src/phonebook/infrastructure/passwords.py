"""Per-user salted password hashing with PBKDF2-HMAC-SHA256."""

import hashlib
import hmac
import os

ITERATIONS = 100_000
SALT_BYTES = 16


class Pbkdf2PasswordHasher:
    """Stores ``<salt hex>$<digest hex>``; a fresh salt for every hash."""

    def __init__(self, iterations: int = ITERATIONS) -> None:
        self._iterations = iterations

    def _digest(self, password: str, salt: bytes) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, self._iterations)

    def hash(self, password: str) -> str:
        salt = os.urandom(SALT_BYTES)
        return f"{salt.hex()}${self._digest(password, salt).hex()}"

    def verify(self, password: str, hashed: str) -> bool:
        """Constant-time check of password against a stored salt$digest string."""
        salt_hex, sep, digest_hex = (hashed or "").partition("$")
        if not sep:
            return False
        try:
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(digest_hex)
        except ValueError:
            return False
        return hmac.compare_digest(self._digest(password, salt), expected)

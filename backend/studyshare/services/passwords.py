"""
Salted scrypt password credentials.

Stored format: "<derived key hex>.<salt hex>". The salt's hex string is what
gets fed to scrypt, so credentials stay readable as plain text.
"""

import hashlib
import hmac
import secrets

SALT_BYTES = 16
KEY_LENGTH = 64
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1


def _derive(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("ascii"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    """Hash a plain-text password with a fresh random salt."""
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive(password, salt).hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    """Check a plain-text password against a stored credential in constant time."""
    hashed, sep, salt = stored.partition(".")
    if not sep or not salt:
        return False
    try:
        expected = bytes.fromhex(hashed)
    except ValueError:
        return False
    return hmac.compare_digest(expected, _derive(password, salt))

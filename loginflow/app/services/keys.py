"""
Random keys and their stored form.

Reset keys, recovery keys and request confirmation keys are all generated
here, persisted only as SHA-256 hex digests and compared in constant time.
"""

import hashlib
import hmac
import re
import secrets
import string

KEY_ALPHABET = string.ascii_letters + string.digits
SPECIAL_CHARS = "!@#$%^&*()"


def generate_password(length: int = 12, special_chars: bool = True) -> str:
    alphabet = KEY_ALPHABET + (SPECIAL_CHARS if special_chars else "")
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_key(length: int = 20) -> str:
    return generate_password(length, special_chars=False)


def sanitize_key(key: str) -> str:
    """Drop everything a generated key can never contain"""
    return re.sub(r"[^a-zA-Z0-9]", "", key or "")


def hash_key(key: str) -> str:
    return hashlib.sha256(key.encode()).hexdigest()


def keys_match(key: str, key_hash: str) -> bool:
    return hmac.compare_digest(hash_key(key), key_hash or "")

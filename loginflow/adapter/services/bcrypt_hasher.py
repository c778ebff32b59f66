import bcrypt

from loginflow.app.services.password_hasher import IPasswordHasher

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt implementation of IPasswordHasher (cost factor 12 by default)"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed or unusable stored hash
            return False

    def burn(self) -> None:
        bcrypt.checkpw(b"dummy_password", self._dummy_hash)

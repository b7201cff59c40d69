"""Password hashing helpers (bcrypt)"""
import bcrypt

# bcrypt only reads the first 72 bytes of its input
_MAX_PASSWORD_BYTES = 72


def _to_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Return a salted bcrypt hash of ``password``"""
    return bcrypt.hashpw(_to_bytes(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison of ``password`` against a stored hash.

    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(_to_bytes(password), password_hash.encode())
    except ValueError:
        return False

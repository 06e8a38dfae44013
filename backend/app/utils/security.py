import bcrypt

from ..config import BCRYPT_ROUNDS

# bcrypt only looks at the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash password using bcrypt directly (bypasses passlib+version issues).

    A fresh salt is generated per call and embedded in the digest, so hashing the
    same password twice yields two different strings. `rounds` is the bcrypt work
    factor and defaults to BCRYPT_ROUNDS.

    bcrypt truncates at 72 *bytes* and this build raises if you exceed it,
    so enforce the limit explicitly.
    """
    if not password:
        raise ValueError("Password is required")

    pw_bytes = password.encode("utf-8")
    if len(pw_bytes) > MAX_PASSWORD_BYTES:
        raise ValueError("Password must be 72 bytes or less")

    hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds or BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    # checkpw compares in constant time; any malformed digest is just a mismatch.
    try:
        if not password or not hashed:
            return False
        pw_bytes = password.encode("utf-8")
        if len(pw_bytes) > MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False

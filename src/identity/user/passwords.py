"""Password hashes for stored accounts.

Hashing is delegated to Werkzeug, whose encoded form records the method and
its parameters (``scrypt:32768:8:1$<salt>$<hash>``) so the work factor can be
raised later without invalidating existing accounts.
"""

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def check_password(password: str, encoded: str) -> bool:
    if not encoded:
        return False
    try:
        return check_password_hash(encoded, password)
    except ValueError:
        # Unknown method or unreadable parameters in the stored hash
        return False

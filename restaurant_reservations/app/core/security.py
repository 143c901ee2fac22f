"""
Password check helpers.

Passwords are stored in plain text, as the data written by the mobile
application expects.  The comparison is still done in constant time
with ``hmac.compare_digest``.  A real deployment must store a salted
hash instead (PBKDF2, bcrypt or argon2) and verify against it here.
"""

import hmac


def verify_password(plain_password: str, stored_password: str) -> bool:
    """Return True if ``plain_password`` equals the stored password."""
    return hmac.compare_digest(
        plain_password.encode("utf-8"), stored_password.encode("utf-8")
    )

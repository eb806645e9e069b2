"""Password hashing strategies."""

from __future__ import annotations

import hashlib
import hmac

from werkzeug.security import check_password_hash, generate_password_hash

from bookshelf.domain.users.repositories import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted hashes in werkzeug's ``method$salt$hash`` format."""

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password))

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except ValueError:
            # Not a werkzeug hash (e.g. a legacy hex digest).
            return False


class LegacySha256PasswordHasher(PasswordHasher):
    """Unsalted hex SHA-256 digest of the UTF-8 password.

    Matches hashes already stored by older deployments. Prefer
    :class:`WerkzeugPasswordHasher` for anything new.
    """

    def hash(self, password: str) -> str:
        return hashlib.sha256(password.encode("utf-8")).hexdigest()

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        return hmac.compare_digest(self.hash(password), hashed.lower())


def build_password_hasher(scheme: str) -> PasswordHasher:
    if scheme == "legacy":
        return LegacySha256PasswordHasher()
    return WerkzeugPasswordHasher()

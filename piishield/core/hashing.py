"""One-way digests for exact-match lookup of PII without keeping plaintext."""

import hashlib

HASH_ALGORITHM = "sha256"


def hash_pii(value: str) -> str:
    """Return the hex SHA-256 digest of ``value``.

    Unsalted: identical inputs always produce identical digests so the result
    can be indexed and used for deduplication.
    """
    return hashlib.new(HASH_ALGORITHM, value.encode("utf-8")).hexdigest()


def hash_with_salt(value: str, salt: str) -> str:
    """Return the hex SHA-256 digest of ``value + salt``.

    The salt is generated, stored and managed by the caller.
    """
    return hash_pii(value + salt)

"""Reversible substitution of PII values with opaque tokens."""

import logging
import secrets
from typing import Optional

from ..core.config import DEFAULT_TOKEN_PREFIX
from ..core.exceptions import TokenizationError, ValidationError
from .store import InMemoryTokenStore, TokenStore

logger = logging.getLogger(__name__)

MIN_ENTROPY_BYTES = 16
MAX_TOKEN_ATTEMPTS = 8


class Tokenizer:
    """Issues and resolves tokens through an injected :class:`TokenStore`.

    The same value always resolves to the same token for the lifetime of the
    store, and an issued token is never reassigned.

    Args:
        store: Mapping backend (defaults to a fresh in-memory store)
        prefix: Human-distinguishable token prefix
        entropy_bytes: Random bytes per token, at least 16
    """

    def __init__(
        self,
        store: Optional[TokenStore] = None,
        prefix: str = DEFAULT_TOKEN_PREFIX,
        entropy_bytes: int = MIN_ENTROPY_BYTES,
    ):
        if entropy_bytes < MIN_ENTROPY_BYTES:
            raise ValidationError(
                f"entropy_bytes must be at least {MIN_ENTROPY_BYTES}",
                field_name="entropy_bytes",
            )
        if not prefix:
            raise ValidationError("Token prefix must not be empty", field_name="prefix")

        self.store = store if store is not None else InMemoryTokenStore()
        self.prefix = prefix
        self.entropy_bytes = entropy_bytes

    def _new_token(self) -> str:
        return self.prefix + secrets.token_hex(self.entropy_bytes)

    def tokenize(self, value: str) -> str:
        """Return the token for ``value``, issuing one if needed.

        Raises:
            TokenizationError: If no unused token could be generated
        """
        existing = self.store.get_by_value(value)
        if existing is not None:
            return existing

        for _ in range(MAX_TOKEN_ATTEMPTS):
            token = self.store.put_if_absent(self._new_token(), value)
            if token is not None:
                return token
            logger.warning("Generated token already in use, regenerating")

        raise TokenizationError(
            f"Could not allocate an unused token after {MAX_TOKEN_ATTEMPTS} attempts",
            store_type=self.store.store_type,
        )

    def detokenize(self, token: str) -> Optional[str]:
        """Return the original value, or None when the token is unknown."""
        return self.store.get_by_token(token)

    def is_token(self, candidate: str) -> bool:
        """Whether ``candidate`` has the shape of a token from this tokenizer."""
        body = candidate[len(self.prefix) :]
        return (
            candidate.startswith(self.prefix)
            and len(body) == self.entropy_bytes * 2
            and all(c in "0123456789abcdef" for c in body)
        )

    def revoke(self, token: str) -> bool:
        """Forget a token; later detokenization returns None."""
        return self.store.delete(token)

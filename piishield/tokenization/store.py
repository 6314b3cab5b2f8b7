"""Token store interface and the in-memory implementation."""

import threading
from abc import ABC, abstractmethod
from typing import Optional


class TokenStore(ABC):
    """
    Abstract mapping between issued tokens and the values they stand for.

    The mapping is injective in both directions: a value has at most one
    token and a token names at most one value. Implementations must make
    :meth:`put_if_absent` atomic so that concurrent tokenization of the same
    new value cannot allocate two tokens.
    """

    @property
    @abstractmethod
    def store_type(self) -> str:
        """Return the store type identifier."""
        pass

    @abstractmethod
    def get_by_value(self, value: str) -> Optional[str]:
        """Return the token mapped to ``value``, or None."""
        pass

    @abstractmethod
    def get_by_token(self, token: str) -> Optional[str]:
        """Return the value mapped to ``token``, or None."""
        pass

    @abstractmethod
    def put_if_absent(self, token: str, value: str) -> Optional[str]:
        """
        Atomically map ``token`` to ``value`` unless ``value`` is already mapped.

        Returns:
            The token mapped to ``value`` after the call: ``token`` if it was
            stored, the pre-existing token if another writer mapped ``value``
            first, or None if ``token`` is already taken by a different value
        """
        pass

    @abstractmethod
    def delete(self, token: str) -> bool:
        """Remove a mapping; returns True if the token existed."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every mapping."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class InMemoryTokenStore(TokenStore):
    """Process-local store guarded by a re-entrant lock."""

    def __init__(self) -> None:
        self._by_token: dict[str, str] = {}
        self._by_value: dict[str, str] = {}
        self._lock = threading.RLock()

    @property
    def store_type(self) -> str:
        return "memory"

    def get_by_value(self, value: str) -> Optional[str]:
        with self._lock:
            return self._by_value.get(value)

    def get_by_token(self, token: str) -> Optional[str]:
        with self._lock:
            return self._by_token.get(token)

    def put_if_absent(self, token: str, value: str) -> Optional[str]:
        with self._lock:
            existing = self._by_value.get(value)
            if existing is not None:
                return existing
            if token in self._by_token:
                return None

            self._by_token[token] = value
            self._by_value[value] = token
            return token

    def delete(self, token: str) -> bool:
        with self._lock:
            value = self._by_token.pop(token, None)
            if value is None:
                return False
            del self._by_value[value]
            return True

    def clear(self) -> None:
        with self._lock:
            self._by_token.clear()
            self._by_value.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_token)

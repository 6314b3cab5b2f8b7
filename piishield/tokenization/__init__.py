"""Tokenization of PII values."""

from .database import SQLiteTokenStore
from .store import InMemoryTokenStore, TokenStore
from .tokenizer import Tokenizer

__all__ = ["TokenStore", "InMemoryTokenStore", "SQLiteTokenStore", "Tokenizer"]

"""Authenticated encryption of PII values.

Envelope format (stable across versions):

    base64( salt[16] || iv[12] || ciphertext || tag[16] )

The key is derived per call from caller-supplied key material with
PBKDF2-HMAC-SHA256 and the envelope's own salt, then used with AES-256-GCM.
An envelope is self-describing: decrypting it needs only the envelope and the
original key material.
"""

import base64
import binascii
import hashlib
import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .exceptions import (
    ConfigurationError,
    DecryptionError,
    EncryptionError,
    EnvelopeFormatError,
)

logger = logging.getLogger(__name__)

# Constants for cryptographic operations
DEFAULT_HMAC_ALGORITHM = "sha256"
DEFAULT_PBKDF2_ITERATIONS = 100000
MIN_PBKDF2_ITERATIONS = 100000
SALT_LENGTH = 16
IV_LENGTH = 12  # 96 bits for AES-GCM
KEY_LENGTH = 32  # 256 bits for AES-256
TAG_LENGTH = 16
ENCRYPTION_ALGORITHM = "AES-GCM-256"


@dataclass(frozen=True)
class SecurityConfig:
    """Configuration for key derivation and encryption.

    Only the iteration count is tunable. Salt, IV and key lengths are fixed by
    the envelope format and validated so a misconfiguration cannot produce
    envelopes older readers cannot split.
    """

    pbkdf2_iterations: int = DEFAULT_PBKDF2_ITERATIONS
    hmac_algorithm: str = DEFAULT_HMAC_ALGORITHM
    salt_length: int = SALT_LENGTH
    iv_length: int = IV_LENGTH
    key_length: int = KEY_LENGTH

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.hmac_algorithm != DEFAULT_HMAC_ALGORITHM:
            raise ConfigurationError(
                f"Unsupported HMAC algorithm: {self.hmac_algorithm}",
                config_section="security",
            )

        if self.pbkdf2_iterations < MIN_PBKDF2_ITERATIONS:
            raise ConfigurationError(
                f"PBKDF2 iterations must be at least {MIN_PBKDF2_ITERATIONS:,}",
                config_section="security",
            )

        if self.salt_length != SALT_LENGTH:
            raise ConfigurationError(
                f"Salt length must be {SALT_LENGTH} bytes", config_section="security"
            )

        if self.iv_length != IV_LENGTH:
            raise ConfigurationError(
                f"IV length must be {IV_LENGTH} bytes for AES-GCM",
                config_section="security",
            )

        if self.key_length != KEY_LENGTH:
            raise ConfigurationError(
                f"Key length must be {KEY_LENGTH} bytes for AES-256",
                config_section="security",
            )


class CryptoUtils:
    """Low-level cryptographic primitives."""

    @staticmethod
    def generate_salt(length: int = SALT_LENGTH) -> bytes:
        """Generate a cryptographically secure random salt."""
        return secrets.token_bytes(length)

    @staticmethod
    def generate_nonce(length: int = IV_LENGTH) -> bytes:
        """Generate a cryptographically secure random nonce (IV)."""
        return secrets.token_bytes(length)

    @staticmethod
    def derive_encryption_key(
        key_material: str,
        salt: bytes,
        config: Optional[SecurityConfig] = None,
    ) -> bytes:
        """
        Derive an AES key from a passphrase using PBKDF2.

        Args:
            key_material: Caller-supplied passphrase
            salt: Salt for key derivation
            config: Security configuration

        Returns:
            Derived encryption key
        """
        if config is None:
            config = SecurityConfig()

        return hashlib.pbkdf2_hmac(
            config.hmac_algorithm,
            key_material.encode("utf-8"),
            salt,
            config.pbkdf2_iterations,
            dklen=config.key_length,
        )

    @staticmethod
    def encrypt_data(data: bytes, key: bytes, nonce: bytes) -> bytes:
        """
        Encrypt data using AES-GCM.

        Returns:
            Ciphertext with the authentication tag appended
        """
        if len(key) != KEY_LENGTH:
            raise EncryptionError(
                f"Key must be {KEY_LENGTH} bytes for AES-256",
                algorithm=ENCRYPTION_ALGORITHM,
            )
        if len(nonce) != IV_LENGTH:
            raise EncryptionError(
                f"Nonce must be {IV_LENGTH} bytes for AES-GCM",
                algorithm=ENCRYPTION_ALGORITHM,
            )

        return AESGCM(key).encrypt(nonce, data, None)

    @staticmethod
    def decrypt_data(ciphertext: bytes, key: bytes, nonce: bytes) -> bytes:
        """
        Decrypt data using AES-GCM.

        Raises:
            cryptography.exceptions.InvalidTag: If authentication fails
        """
        return AESGCM(key).decrypt(nonce, ciphertext, None)


@dataclass(frozen=True)
class Envelope:
    """Decoded form of a ciphertext envelope."""

    salt: bytes
    iv: bytes
    ciphertext: bytes

    def encode(self) -> str:
        """Serialize to the base64 wire format."""
        return base64.b64encode(self.salt + self.iv + self.ciphertext).decode("ascii")

    @classmethod
    def decode(cls, encoded: str) -> "Envelope":
        """Split a base64 envelope at its fixed offsets.

        Raises:
            EnvelopeFormatError: If the input is not base64 or too short to
                hold a salt, an IV and a tag
        """
        try:
            raw = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError, TypeError) as e:
            raise EnvelopeFormatError(
                "Envelope is not valid base64",
                algorithm=ENCRYPTION_ALGORITHM,
            ) from e

        minimum = SALT_LENGTH + IV_LENGTH + TAG_LENGTH
        if len(raw) < minimum:
            raise EnvelopeFormatError(
                f"Envelope too short: expected at least {minimum} bytes",
                envelope_length=len(raw),
                algorithm=ENCRYPTION_ALGORITHM,
            )

        return cls(
            salt=raw[:SALT_LENGTH],
            iv=raw[SALT_LENGTH : SALT_LENGTH + IV_LENGTH],
            ciphertext=raw[SALT_LENGTH + IV_LENGTH :],
        )


class PIIEncryptor:
    """Encrypts and decrypts individual PII values with caller-supplied keys.

    Instances hold no key material and no mutable state, so one instance can
    be shared freely between threads.
    """

    def __init__(self, config: Optional[SecurityConfig] = None):
        self.config = config or SecurityConfig()

    def encrypt(self, plaintext: str, key_material: str) -> str:
        """
        Encrypt ``plaintext`` into a base64 envelope.

        Every call draws a fresh salt and IV, so encrypting the same value
        twice yields different envelopes.

        Raises:
            EncryptionError: If key material is empty
        """
        self._check_key_material(key_material)

        salt = CryptoUtils.generate_salt(self.config.salt_length)
        iv = CryptoUtils.generate_nonce(self.config.iv_length)
        key = CryptoUtils.derive_encryption_key(key_material, salt, self.config)

        ciphertext = CryptoUtils.encrypt_data(plaintext.encode("utf-8"), key, iv)
        return Envelope(salt=salt, iv=iv, ciphertext=ciphertext).encode()

    def decrypt(self, envelope: str, key_material: str) -> str:
        """
        Decrypt a base64 envelope produced by :meth:`encrypt`.

        Raises:
            EnvelopeFormatError: If the envelope is malformed
            DecryptionError: If the authentication tag does not verify
        """
        self._check_key_material(key_material)

        decoded = Envelope.decode(envelope)
        key = CryptoUtils.derive_encryption_key(key_material, decoded.salt, self.config)

        try:
            plaintext = CryptoUtils.decrypt_data(decoded.ciphertext, key, decoded.iv)
        except InvalidTag as e:
            logger.warning(
                "PII envelope failed authentication (wrong key or tampered data)"
            )
            raise DecryptionError(
                "Failed to decrypt data: authentication tag mismatch",
                context={"algorithm": ENCRYPTION_ALGORITHM},
            ) from e

        return plaintext.decode("utf-8")

    @staticmethod
    def _check_key_material(key_material: str) -> None:
        if not isinstance(key_material, str) or not key_material:
            raise EncryptionError(
                "Key material must be a non-empty string",
                algorithm=ENCRYPTION_ALGORITHM,
            )


_default_encryptor = PIIEncryptor()


def encrypt_pii(plaintext: str, key_material: str) -> str:
    """Encrypt ``plaintext`` with the default security configuration."""
    return _default_encryptor.encrypt(plaintext, key_material)


def decrypt_pii(envelope: str, key_material: str) -> str:
    """Decrypt an envelope with the default security configuration."""
    return _default_encryptor.decrypt(envelope, key_material)

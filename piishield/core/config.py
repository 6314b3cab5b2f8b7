"""Runtime engine configuration from environment variables.

Centralizes the tunable settings of the engine: key-derivation cost, token
prefix, mask character and the salt used for anonymous identifiers. Parsing
is tolerant; invalid values are logged and replaced by safe defaults.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

from .security import DEFAULT_PBKDF2_ITERATIONS, MIN_PBKDF2_ITERATIONS, SecurityConfig

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_PREFIX = "TOK_"
DEFAULT_MASK_CHAR = "*"


@dataclass
class EngineConfig:
    """Engine settings.

    Attributes:
        pbkdf2_iterations: PBKDF2 iteration count for encryption keys
        token_prefix: Human-distinguishable prefix of issued tokens
        mask_char: Default mask character
        anonymous_id_salt: Salt mixed into anonymous identifiers
    """

    pbkdf2_iterations: int = DEFAULT_PBKDF2_ITERATIONS
    token_prefix: str = DEFAULT_TOKEN_PREFIX
    mask_char: str = DEFAULT_MASK_CHAR
    anonymous_id_salt: str = ""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate_iterations()
        self._validate_mask_char()
        self._validate_token_prefix()

        logger.debug(
            f"EngineConfig initialized: iterations={self.pbkdf2_iterations}, "
            f"token_prefix={self.token_prefix!r}"
        )

    def _validate_iterations(self) -> None:
        if (
            not isinstance(self.pbkdf2_iterations, int)
            or self.pbkdf2_iterations < MIN_PBKDF2_ITERATIONS
        ):
            logger.warning(
                f"pbkdf2_iterations must be an integer >= {MIN_PBKDF2_ITERATIONS}, "
                f"got {self.pbkdf2_iterations}, using {DEFAULT_PBKDF2_ITERATIONS}"
            )
            self.pbkdf2_iterations = DEFAULT_PBKDF2_ITERATIONS

    def _validate_mask_char(self) -> None:
        if not isinstance(self.mask_char, str) or len(self.mask_char) != 1:
            logger.warning(
                f"mask_char must be a single character, got {self.mask_char!r}, "
                f"using {DEFAULT_MASK_CHAR!r}"
            )
            self.mask_char = DEFAULT_MASK_CHAR

    def _validate_token_prefix(self) -> None:
        if not isinstance(self.token_prefix, str) or not self.token_prefix:
            logger.warning(
                f"token_prefix must be a non-empty string, using {DEFAULT_TOKEN_PREFIX!r}"
            )
            self.token_prefix = DEFAULT_TOKEN_PREFIX

    @property
    def security(self) -> SecurityConfig:
        return SecurityConfig(pbkdf2_iterations=self.pbkdf2_iterations)

    @classmethod
    def from_environment(cls) -> "EngineConfig":
        """Load configuration from environment variables.

        Environment Variables:
            PIISHIELD_PBKDF2_ITERATIONS: Key-derivation iterations (>= 100000)
            PIISHIELD_TOKEN_PREFIX: Token prefix
            PIISHIELD_MASK_CHAR: Mask character
            PIISHIELD_ANON_SALT: Salt for anonymous identifiers

        Returns:
            EngineConfig instance with values from environment or defaults
        """
        return cls(
            pbkdf2_iterations=cls._get_env_int(
                "PIISHIELD_PBKDF2_ITERATIONS", DEFAULT_PBKDF2_ITERATIONS
            ),
            token_prefix=os.getenv("PIISHIELD_TOKEN_PREFIX", DEFAULT_TOKEN_PREFIX),
            mask_char=os.getenv("PIISHIELD_MASK_CHAR", DEFAULT_MASK_CHAR),
            anonymous_id_salt=os.getenv("PIISHIELD_ANON_SALT", ""),
        )

    @staticmethod
    def _get_env_int(var_name: str, default: int) -> int:
        value = os.getenv(var_name)
        if value is None:
            return default
        try:
            return int(value.strip())
        except ValueError:
            logger.warning(
                f"Invalid integer value for {var_name}: '{value}', using {default}"
            )
            return default

    def to_dict(self) -> dict[str, Any]:
        """Configuration without the anonymous-id salt, safe to log."""
        return {
            "pbkdf2_iterations": self.pbkdf2_iterations,
            "token_prefix": self.token_prefix,
            "mask_char": self.mask_char,
            "anonymous_id_salt_set": bool(self.anonymous_id_salt),
        }


_engine_config: Optional[EngineConfig] = None


def get_engine_config() -> EngineConfig:
    """Process-wide configuration loaded once from the environment."""
    global _engine_config
    if _engine_config is None:
        _engine_config = EngineConfig.from_environment()
    return _engine_config


def reset_engine_config() -> None:
    """Forget the cached configuration (used by tests)."""
    global _engine_config
    _engine_config = None

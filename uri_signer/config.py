"""
Signer configuration.
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .constants import (
    DEFAULT_CONFIG,
    DEFAULT_EXPIRATION,
    DEFAULT_PARAMETER,
    ENV_EXPIRATION,
    ENV_PARAMETER,
)
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class SignerConfig:
    """
    Immutable signer options.

    Attributes:
        parameter: Query string key carrying the token
        expiration: Default validity window in seconds
    """

    parameter: str = DEFAULT_PARAMETER
    expiration: int = DEFAULT_EXPIRATION

    def __post_init__(self):
        if not isinstance(self.parameter, str) or not self.parameter:
            raise ConfigurationError("parameter cannot be empty")

        if isinstance(self.expiration, bool) or not isinstance(self.expiration, int):
            raise ConfigurationError("expiration must be an integer number of seconds")

        if self.expiration <= 0:
            raise ConfigurationError("expiration must be positive")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> 'SignerConfig':
        """Merge config over the defaults and validate the result."""
        unknown = set(config) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        return cls(**{**DEFAULT_CONFIG, **config})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'SignerConfig':
        """
        Build configuration from environment variables.

        Unset or empty variables fall back to the defaults.
        """
        if environ is None:
            environ = os.environ

        config = {}
        if environ.get(ENV_PARAMETER):
            config['parameter'] = environ[ENV_PARAMETER]

        if environ.get(ENV_EXPIRATION):
            try:
                config['expiration'] = int(environ[ENV_EXPIRATION])
            except ValueError:
                raise ConfigurationError(
                    f"{ENV_EXPIRATION} must be an integer, got {environ[ENV_EXPIRATION]!r}"
                )

        return cls.from_mapping(config)

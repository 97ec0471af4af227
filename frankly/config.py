"""
Frankly SDK Configuration.

Provides sensible defaults with override capability.
"""

import os
from typing import Any, Optional

from pydantic import BaseModel

from .exceptions import ConfigurationError
from .version import USER_AGENT

DEFAULT_BASE_ADDRESS = "https://app.franklychat.com/"


def make_base_address(address: Optional[str]) -> str:
    """
    Resolve a caller-supplied origin to the base URL requests are built on.

    ``None``, ``"https"`` and ``"https:"`` select the public Frankly origin.
    Any other value must name its scheme explicitly.

    Raises:
        ConfigurationError: If the address has no http(s) scheme
    """
    if address is None or address in ("https", "https:"):
        return DEFAULT_BASE_ADDRESS

    if address.startswith("https://") or address.startswith("http://"):
        return address if address.endswith("/") else address + "/"

    raise ConfigurationError(
        f"The given address doesn't tell what protocol to use: {address}"
    )


class FranklyConfig(BaseModel):
    """
    Configuration for the Frankly SDK.

    Environment variables (FRANKLY_* prefix) override defaults for any
    field not passed explicitly.
    """

    # Network
    base_url: str = "https:"
    timeout: Optional[float] = None  # None = let requests block

    # Identification
    user_agent: str = USER_AGENT

    # Logging
    log_level: str = "INFO"

    def model_post_init(self, __context):
        """Apply environment variable overrides."""
        self._apply_env_overrides()

    def _apply_env_overrides(self):
        env_map = {
            "FRANKLY_APP_HOST": ("base_url", str),
            "FRANKLY_TIMEOUT": ("timeout", float),
            "FRANKLY_LOG_LEVEL": ("log_level", str),
        }

        for env_var, (attr, type_fn) in env_map.items():
            if attr in self.model_fields_set:
                continue
            value = os.environ.get(env_var)
            if value is None:
                continue
            try:
                setattr(self, attr, type_fn(value))
            except ValueError as e:
                raise ConfigurationError(f"Invalid {env_var}={value!r}: {e}") from e

    @property
    def base_address(self) -> str:
        """Validated origin every request path is appended to."""
        return make_base_address(self.base_url)

    def to_dict(self) -> dict[str, Any]:
        """Export config to dictionary."""
        return {
            "base_url": self.base_url,
            "timeout": self.timeout,
            "user_agent": self.user_agent,
            "log_level": self.log_level,
        }

    @classmethod
    def development(cls, base_url: str = "http://localhost:8080/") -> "FranklyConfig":
        """Create development config pointing at a local server."""
        return cls(
            base_url=base_url,
            timeout=5.0,
            log_level="DEBUG",
        )

    @classmethod
    def production(cls) -> "FranklyConfig":
        """Create production config with strict settings."""
        return cls(
            base_url=DEFAULT_BASE_ADDRESS,
            timeout=30.0,
            log_level="WARNING",
        )

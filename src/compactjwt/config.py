"""Configuration for compactjwt.

The codec is configured from environment variables with the
``COMPACTJWT_`` prefix.  Configuration can also be constructed directly and
passed to `~compactjwt.codec.TokenCodec`, in which case explicit arguments
are used as given.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from safir.logging import LogLevel, Profile

from .constants import ENV_PREFIX

__all__ = ["Config"]


class Config(BaseSettings):
    """Configuration for token encoding and decoding."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX, extra="forbid", frozen=True
    )

    require_expiration: bool = Field(
        True,
        title="Require expiration",
        description=(
            "Whether a decoded token must have an exp claim. If false, tokens"
            " without exp are accepted and never expire, but an exp claim"
            " that is present must still be valid"
        ),
    )

    allow_unsecured: bool = Field(
        False,
        title="Allow unsecured tokens",
        description=(
            "Whether to accept tokens with only a header and payload segment"
            " when decoding without any acceptable algorithms"
        ),
    )

    log_level: LogLevel = Field(
        LogLevel.INFO,
        title="Log level",
        description="Log level of the command-line interface",
    )

    log_profile: Profile = Field(
        Profile.development,
        title="Logging profile",
        description="Logging profile of the command-line interface",
    )

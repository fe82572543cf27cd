"""Constants for compactjwt."""

__all__ = [
    "ENV_PREFIX",
    "EXPIRATION_REGEX",
    "LOGGER_NAME",
    "NO_ALGORITHM",
    "TOKEN_TYPE",
]

ENV_PREFIX = "COMPACTJWT_"
"""Prefix for environment variables that configure the codec."""

EXPIRATION_REGEX = "[+-]?[0-9]+"
"""Syntax of an ``exp`` claim given as a string."""

LOGGER_NAME = "compactjwt"
"""Name of the structlog logger used by default."""

NO_ALGORITHM = "none"
"""Value of the ``alg`` header for unsigned tokens."""

TOKEN_TYPE = "JWT"
"""Value of the ``typ`` header in every token."""

"""Exceptions for compactjwt."""

from __future__ import annotations

__all__ = [
    "ExpiredTokenError",
    "InvalidExpirationError",
    "InvalidHeaderError",
    "InvalidPayloadError",
    "InvalidSignatureError",
    "InvalidTokenError",
    "JWTError",
    "MissingComponentsError",
    "SerializationError",
    "SigningError",
]


class JWTError(Exception):
    """Base class for compactjwt exceptions."""


class InvalidTokenError(JWTError):
    """Base class for errors raised while decoding a token.

    Catch this to treat every malformed, unverifiable, or expired token the
    same way.
    """


class MissingComponentsError(InvalidTokenError):
    """The token does not have the required number of segments."""


class InvalidHeaderError(InvalidTokenError):
    """The header segment could not be decoded."""


class InvalidSignatureError(InvalidTokenError):
    """No acceptable algorithm produced a matching signature."""


class InvalidPayloadError(InvalidTokenError):
    """The payload segment is not valid base64url-encoded JSON object."""


class InvalidExpirationError(InvalidTokenError):
    """The ``exp`` claim is missing or cannot be converted to an integer."""


class ExpiredTokenError(InvalidTokenError):
    """The token has expired."""


class SerializationError(JWTError):
    """The claims or header could not be serialized as JSON."""


class SigningError(JWTError):
    """The cryptographic provider could not sign the token."""

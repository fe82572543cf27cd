"""General utility functions."""

from __future__ import annotations

import base64
import binascii
import re

__all__ = [
    "add_padding",
    "base64url_decode",
    "base64url_encode",
    "normalize_signature",
]

_BASE64URL_REGEX = re.compile("^[A-Za-z0-9_-]*$")


def add_padding(encoded: str) -> str:
    """Add padding to base64 encoded bytes.

    Parameters
    ----------
    encoded
        A base64-encoded string, possibly with the padding removed.

    Returns
    -------
    str
        A correctly-padded version of the encoded string.
    """
    underflow = len(encoded) % 4
    if underflow:
        return encoded + ("=" * (4 - underflow))
    else:
        return encoded


def base64url_encode(data: bytes) -> str:
    """Encode bytes in URL-safe base64 with the padding stripped."""
    return base64.urlsafe_b64encode(data).decode().rstrip("=")


def base64url_decode(encoded: str) -> bytes:
    """Decode unpadded URL-safe base64.

    Unlike `base64.urlsafe_b64decode`, this does not silently discard
    characters outside the alphabet.

    Parameters
    ----------
    encoded
        URL-safe base64 without padding.

    Returns
    -------
    bytes
        The decoded data.

    Raises
    ------
    ValueError
        Raised if the string contains characters outside the URL-safe
        alphabet (including padding) or has an impossible length.
    """
    if not _BASE64URL_REGEX.match(encoded):
        raise ValueError("Invalid character in base64url data")
    if len(encoded) % 4 == 1:
        raise ValueError("Invalid length for base64url data")
    try:
        return base64.urlsafe_b64decode(add_padding(encoded))
    except binascii.Error as e:
        raise ValueError(f"Invalid base64url data: {e!s}") from e


def normalize_signature(signature: str) -> str:
    """Convert a standard base64 signature to unpadded base64url.

    Some producers emit standard base64 for the signature segment, so accept
    that form when comparing signatures.
    """
    signature = signature.replace("+", "-").replace("/", "_")
    return signature.rstrip("=")

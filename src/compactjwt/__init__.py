"""Encode, sign, decode, and verify JSON Web Tokens."""

from .algorithms import Algorithm, AlgorithmName
from .claims import Claims
from .codec import TokenCodec, decode, encode, get_unverified_header
from .config import Config
from .exceptions import (
    ExpiredTokenError,
    InvalidExpirationError,
    InvalidHeaderError,
    InvalidPayloadError,
    InvalidSignatureError,
    InvalidTokenError,
    JWTError,
    MissingComponentsError,
    SerializationError,
    SigningError,
)
from .keypair import RSAKeyPair

__all__ = [
    "Algorithm",
    "AlgorithmName",
    "Claims",
    "Config",
    "ExpiredTokenError",
    "InvalidExpirationError",
    "InvalidHeaderError",
    "InvalidPayloadError",
    "InvalidSignatureError",
    "InvalidTokenError",
    "JWTError",
    "MissingComponentsError",
    "RSAKeyPair",
    "SerializationError",
    "SigningError",
    "TokenCodec",
    "decode",
    "encode",
    "get_unverified_header",
]

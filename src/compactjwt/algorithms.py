"""Signing algorithms for tokens.

The supported algorithms form a closed set: three HMAC variants holding a
symmetric key and three RSA variants holding an RSA key.  Each variant is
represented by the same `Algorithm` class tagged with an `AlgorithmName`, so
that every operation can dispatch exhaustively on the tag.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Self

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .exceptions import SigningError
from .keypair import RSAKeyPair, public_key_from_pem
from .util import base64url_decode, base64url_encode

__all__ = [
    "Algorithm",
    "AlgorithmName",
    "RSAKey",
]

RSAKey = rsa.RSAPrivateKey | rsa.RSAPublicKey
"""Key material accepted by the RSA algorithms."""


class AlgorithmName(StrEnum):
    """Identifier of a supported algorithm, as used in the ``alg`` header."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"


def _symmetric_key(key: bytes | str) -> bytes:
    if isinstance(key, str):
        return key.encode()
    if not isinstance(key, bytes):
        msg = f"HMAC key must be bytes or str, not {type(key).__name__}"
        raise TypeError(msg)
    return key


def _asymmetric_key(key: RSAKey | RSAKeyPair | bytes) -> RSAKey:
    if isinstance(key, RSAKeyPair):
        return key.private_key
    if isinstance(key, bytes):
        if b"PRIVATE KEY" in key:
            return RSAKeyPair.from_pem(key).private_key
        return public_key_from_pem(key)
    if not isinstance(key, rsa.RSAPrivateKey | rsa.RSAPublicKey):
        msg = f"RSA key must be an RSA key, not {type(key).__name__}"
        raise TypeError(msg)
    return key


@dataclass(frozen=True, slots=True)
class Algorithm:
    """A signing algorithm bound to its key.

    Use the per-variant constructors (`hs256`, `rs512`, and so on) or
    `from_name` rather than the constructor.  The caller owns the key
    material; the algorithm only holds a reference to it.

    Parameters
    ----------
    name
        Which algorithm this is.
    key
        Raw bytes for the HMAC algorithms, an RSA private or public key for
        the RSA algorithms.  An RSA public key can verify but not sign.

    Raises
    ------
    TypeError
        Raised if the key is the wrong kind for the algorithm.
    """

    name: AlgorithmName
    key: bytes | RSAKey = field(repr=False)

    def __post_init__(self) -> None:
        if self.is_hmac:
            if not isinstance(self.key, bytes):
                msg = f"{self.name} requires a symmetric key as bytes"
                raise TypeError(msg)
        elif not isinstance(self.key, rsa.RSAPrivateKey | rsa.RSAPublicKey):
            raise TypeError(f"{self.name} requires an RSA key")

    @classmethod
    def from_name(
        cls, name: str, key: bytes | str | RSAKey | RSAKeyPair
    ) -> Self:
        """Construct an algorithm from its string identifier.

        Parameters
        ----------
        name
            Algorithm identifier, such as ``HS256`` or ``RS512``.
        key
            Key for the algorithm.  For the RSA algorithms, this may also be
            a PEM-encoded private or public key.

        Returns
        -------
        Algorithm
            The corresponding algorithm.

        Raises
        ------
        ValueError
            Raised if the algorithm name is not recognized.
        """
        try:
            algorithm_name = AlgorithmName(name.upper())
        except ValueError:
            raise ValueError(f"Unknown algorithm {name}") from None
        match algorithm_name:
            case (
                AlgorithmName.HS256 | AlgorithmName.HS384 | AlgorithmName.HS512
            ):
                if not isinstance(key, bytes | str):
                    raise TypeError(f"{name} requires a symmetric key")
                return cls(algorithm_name, _symmetric_key(key))
            case (
                AlgorithmName.RS256 | AlgorithmName.RS384 | AlgorithmName.RS512
            ):
                if isinstance(key, str):
                    key = key.encode()
                return cls(algorithm_name, _asymmetric_key(key))

    @classmethod
    def hs256(cls, key: bytes | str) -> Self:
        """HMAC using SHA-256."""
        return cls(AlgorithmName.HS256, _symmetric_key(key))

    @classmethod
    def hs384(cls, key: bytes | str) -> Self:
        """HMAC using SHA-384."""
        return cls(AlgorithmName.HS384, _symmetric_key(key))

    @classmethod
    def hs512(cls, key: bytes | str) -> Self:
        """HMAC using SHA-512."""
        return cls(AlgorithmName.HS512, _symmetric_key(key))

    @classmethod
    def rs256(cls, key: RSAKey | RSAKeyPair | bytes) -> Self:
        """RSASSA-PKCS1-v1_5 using SHA-256."""
        return cls(AlgorithmName.RS256, _asymmetric_key(key))

    @classmethod
    def rs384(cls, key: RSAKey | RSAKeyPair | bytes) -> Self:
        """RSASSA-PKCS1-v1_5 using SHA-384."""
        return cls(AlgorithmName.RS384, _asymmetric_key(key))

    @classmethod
    def rs512(cls, key: RSAKey | RSAKeyPair | bytes) -> Self:
        """RSASSA-PKCS1-v1_5 using SHA-512."""
        return cls(AlgorithmName.RS512, _asymmetric_key(key))

    def __str__(self) -> str:
        return str(self.name)

    @property
    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """The hash function underlying the algorithm."""
        match self.name:
            case AlgorithmName.HS256 | AlgorithmName.RS256:
                return hashes.SHA256()
            case AlgorithmName.HS384 | AlgorithmName.RS384:
                return hashes.SHA384()
            case AlgorithmName.HS512 | AlgorithmName.RS512:
                return hashes.SHA512()

    @property
    def is_hmac(self) -> bool:
        """Whether this is one of the symmetric HMAC algorithms."""
        match self.name:
            case (
                AlgorithmName.HS256 | AlgorithmName.HS384 | AlgorithmName.HS512
            ):
                return True
            case (
                AlgorithmName.RS256 | AlgorithmName.RS384 | AlgorithmName.RS512
            ):
                return False

    def sign(self, message: bytes) -> bytes:
        """Compute the signature or MAC of a message.

        Parameters
        ----------
        message
            Bytes to sign.

        Returns
        -------
        bytes
            The raw signature.

        Raises
        ------
        SigningError
            Raised if the key is an RSA public key or the cryptographic
            provider rejects the key or message.
        """
        if isinstance(self.key, bytes):
            digest = self.hash_algorithm.name
            return hmac.new(self.key, message, digest).digest()
        if not isinstance(self.key, rsa.RSAPrivateKey):
            raise SigningError(f"{self.name} signing requires a private key")
        try:
            return self.key.sign(
                message, padding.PKCS1v15(), self.hash_algorithm
            )
        except (TypeError, ValueError, UnsupportedAlgorithm) as e:
            raise SigningError(f"{self.name} signing failed: {e!s}") from e

    def verify(self, message: bytes, signature: str) -> bool:
        """Check a signature segment against a message.

        Parameters
        ----------
        message
            Bytes that were signed.
        signature
            Unpadded base64url encoding of the signature, as found in the
            third segment of a token.

        Returns
        -------
        bool
            Whether the signature is valid for this algorithm and key.
        """
        if isinstance(self.key, bytes):
            expected = base64url_encode(self.sign(message))
            return hmac.compare_digest(expected.encode(), signature.encode())
        try:
            raw_signature = base64url_decode(signature)
        except ValueError:
            return False
        if isinstance(self.key, rsa.RSAPrivateKey):
            public_key = self.key.public_key()
        else:
            public_key = self.key
        try:
            public_key.verify(
                raw_signature, message, padding.PKCS1v15(), self.hash_algorithm
            )
        except InvalidSignature:
            return False
        return True

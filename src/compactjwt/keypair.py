"""RSA key pair handling."""

from typing import Self

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
    load_pem_private_key,
    load_pem_public_key,
)

__all__ = ["RSAKeyPair", "public_key_from_pem"]


def public_key_from_pem(pem: bytes) -> rsa.RSAPublicKey:
    """Import an RSA public key for signature verification.

    Parameters
    ----------
    pem
        The PEM-encoded public key in SubjectPublicKeyInfo format.

    Returns
    -------
    cryptography.hazmat.primitives.asymmetric.rsa.RSAPublicKey
        The corresponding public key.

    Raises
    ------
    cryptography.exceptions.UnsupportedAlgorithm
        Raised if the provided key is not an RSA public key.
    """
    public_key = load_pem_public_key(pem)
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise UnsupportedAlgorithm("Key is not an RSA public key")
    return public_key


class RSAKeyPair:
    """An RSA key pair with some simple helper functions.

    Notes
    -----
    Created by calling :py:meth:`~RSAKeyPair.generate` or
    :py:meth:`~RSAKeyPair.from_pem` rather than the constructor.
    """

    @classmethod
    def from_pem(cls, pem: bytes) -> Self:
        """Import an RSA key pair from a PEM-encoded private key.

        Parameters
        ----------
        pem
            The PEM-encoded key (must not be password-protected).

        Returns
        -------
        RSAKeyPair
            The corresponding key pair.

        Raises
        ------
        cryptography.exceptions.UnsupportedAlgorithm
            Raised if the provided key is not an RSA private key.
        """
        private_key = load_pem_private_key(pem, password=None)
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise UnsupportedAlgorithm("Key is not an RSA private key")
        return cls(private_key)

    @classmethod
    def generate(cls, key_size: int = 2048) -> Self:
        """Generate a new RSA key pair.

        Parameters
        ----------
        key_size
            Size of the modulus in bits.

        Returns
        -------
        RSAKeyPair
            Newly-generated key pair.
        """
        private_key = rsa.generate_private_key(
            public_exponent=65537, key_size=key_size
        )
        return cls(private_key)

    def __init__(self, private_key: rsa.RSAPrivateKey) -> None:
        self.private_key = private_key
        self._private_key_as_pem: bytes | None = None
        self._public_key_as_pem: bytes | None = None

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        """The public half of the key pair."""
        return self.private_key.public_key()

    def private_key_as_pem(self) -> bytes:
        """Return the serialized private key.

        Returns
        -------
        bytes
            Private key encoded using PKCS#8 with no encryption.
        """
        if not self._private_key_as_pem:
            self._private_key_as_pem = self.private_key.private_bytes(
                Encoding.PEM, PrivateFormat.PKCS8, NoEncryption()
            )
        return self._private_key_as_pem

    def public_key_as_pem(self) -> bytes:
        """Return the PEM-encoded public key.

        Returns
        -------
        bytes
            The public key in PEM encoding and SubjectPublicKeyInfo format.
        """
        if not self._public_key_as_pem:
            self._public_key_as_pem = self.public_key.public_bytes(
                Encoding.PEM, PublicFormat.SubjectPublicKeyInfo
            )
        return self._public_key_as_pem

"""Constants used in test fixtures and setup."""

from compactjwt.keypair import RSAKeyPair

__all__ = [
    "TEST_HMAC_KEY",
    "TEST_KEYPAIR",
    "TEST_NOW",
    "TEST_OTHER_KEYPAIR",
]

TEST_HMAC_KEY = b"0123456789abcdef" * 4
"""Symmetric key for the HMAC algorithms."""

TEST_KEYPAIR = RSAKeyPair.generate()
"""RSA key pair for the RSA algorithms.

Generating this takes a surprisingly long time when summed across every test,
so generate one statically at import time for each test run and use it for
every test that needs an RSA key.
"""

TEST_OTHER_KEYPAIR = RSAKeyPair.generate()
"""A second RSA key pair that must not verify tokens signed by the first."""

TEST_NOW = 1_700_000_000
"""Fixed current time returned by the test codec clock."""

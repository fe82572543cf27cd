"""Encoding and decoding of JSON Web Tokens."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from safir.datetime import current_datetime
from structlog.stdlib import BoundLogger

from .algorithms import Algorithm
from .claims import Claims
from .config import Config
from .constants import EXPIRATION_REGEX, NO_ALGORITHM, TOKEN_TYPE
from .exceptions import (
    ExpiredTokenError,
    InvalidExpirationError,
    InvalidHeaderError,
    InvalidPayloadError,
    InvalidSignatureError,
    MissingComponentsError,
    SerializationError,
)
from .logging import get_logger
from .util import base64url_decode, base64url_encode, normalize_signature

__all__ = [
    "TokenCodec",
    "decode",
    "encode",
    "get_unverified_header",
]


def _current_time() -> int:
    return int(current_datetime().timestamp())


def _reject_constant(constant: str) -> Any:
    raise ValueError(f"Invalid JSON constant {constant}")


class TokenCodec:
    """Encode, decode, and verify tokens.

    The codec holds only configuration, a logger, and a clock, so a single
    instance may be shared between threads.

    Parameters
    ----------
    config
        Codec configuration.  If not given, it is read from the environment.
    logger
        Logger to use to report rejected tokens.
    clock
        Function returning the current time in seconds since epoch, used for
        expiration checks.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        logger: BoundLogger | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._config = config if config is not None else Config()
        self._logger = logger if logger is not None else get_logger()
        self._clock = clock if clock is not None else _current_time

    @property
    def config(self) -> Config:
        """Configuration of the codec."""
        return self._config

    def encode(
        self, payload: Mapping[str, Any], algorithm: Algorithm | None = None
    ) -> str:
        """Encode a token.

        Parameters
        ----------
        payload
            Claims of the token.
        algorithm
            Algorithm used to sign the token.  If not given, an unsigned
            token consisting only of the header and payload is returned.

        Returns
        -------
        str
            The encoded token.

        Raises
        ------
        SerializationError
            Raised if the payload cannot be serialized as JSON.
        SigningError
            Raised if the algorithm cannot sign the token.
        """
        header = {
            "alg": NO_ALGORITHM if algorithm is None else str(algorithm.name),
            "typ": TOKEN_TYPE,
        }
        encoded_header = base64url_encode(self._serialize(header))
        encoded_payload = base64url_encode(self._serialize(dict(payload)))
        message = f"{encoded_header}.{encoded_payload}"
        if algorithm is None:
            return message
        signature = algorithm.sign(message.encode())
        return f"{message}.{base64url_encode(signature)}"

    def decode(
        self,
        token: str,
        algorithms: Algorithm | Iterable[Algorithm] | None = None,
    ) -> Claims:
        """Decode and verify a token.

        The token is accepted if any of the acceptable algorithms produces a
        matching signature.  If no algorithms are given, the signature is not
        checked at all, which is how unsecured tokens are decoded.

        Parameters
        ----------
        token
            The encoded token.
        algorithms
            Acceptable algorithms, or a single algorithm.

        Returns
        -------
        Claims
            The claims of the token.

        Raises
        ------
        MissingComponentsError
            Raised if the token does not have three segments.
        InvalidSignatureError
            Raised if no acceptable algorithm verifies the signature.
        InvalidPayloadError
            Raised if the payload is not base64url-encoded JSON object.
        InvalidExpirationError
            Raised if the ``exp`` claim is invalid, or missing when
            expiration is required.
        ExpiredTokenError
            Raised if the token has expired.
        """
        if algorithms is None:
            acceptable: list[Algorithm] = []
        elif isinstance(algorithms, Algorithm):
            acceptable = [algorithms]
        else:
            acceptable = list(algorithms)

        segments = token.split(".")
        if len(segments) == 2 and self._accepts_unsecured(acceptable):
            segments.append("")
        if len(segments) != 3:
            msg = f"Token has {len(segments)} segments, expected 3"
            self._logger.warning(
                "Token has wrong number of segments", segments=len(segments)
            )
            raise MissingComponentsError(msg)
        encoded_header, encoded_payload, signature = segments
        signature = normalize_signature(signature)

        if acceptable:
            message = f"{encoded_header}.{encoded_payload}".encode()
            if not any(a.verify(message, signature) for a in acceptable):
                self._logger.warning(
                    "Token signature did not verify",
                    algorithms=[str(a) for a in acceptable],
                )
                raise InvalidSignatureError("Token signature is invalid")

        claims = self._parse_payload(encoded_payload)
        self._check_expiration(claims)
        self._logger.debug(
            "Decoded token",
            algorithms=[str(a) for a in acceptable],
            sub=claims.sub,
        )
        return claims

    def get_unverified_header(self, token: str) -> dict[str, Any]:
        """Return the header of a token without verifying it.

        Parameters
        ----------
        token
            The encoded token, signed or unsigned.

        Returns
        -------
        dict
            The decoded header.

        Raises
        ------
        MissingComponentsError
            Raised if the token has neither two nor three segments.
        InvalidHeaderError
            Raised if the header is not base64url-encoded JSON object.
        """
        segments = token.split(".")
        if len(segments) not in (2, 3):
            msg = f"Token has {len(segments)} segments, expected 2 or 3"
            raise MissingComponentsError(msg)
        try:
            header = self._parse_json(segments[0])
        except ValueError as e:
            raise InvalidHeaderError(f"Invalid token header: {e!s}") from e
        return header

    def _accepts_unsecured(self, algorithms: list[Algorithm]) -> bool:
        return self._config.allow_unsecured and not algorithms

    def _check_expiration(self, claims: Claims) -> None:
        """Enforce the ``exp`` claim.

        ``exp`` may be an integer, a float (truncated toward zero), or a
        string containing an integer.
        """
        if "exp" not in claims:
            if self._config.require_expiration:
                self._logger.warning("Token has no exp claim")
                raise InvalidExpirationError("Token has no exp claim")
            return
        value = claims["exp"]
        try:
            exp = self._parse_expiration(value)
        except ValueError as e:
            self._logger.warning("Invalid exp claim in token", error=str(e))
            raise InvalidExpirationError("Invalid exp claim in token") from e

        now = self._clock()
        if exp < now:
            self._logger.info("Token has expired", exp=exp, now=now)
            raise ExpiredTokenError(f"Token expired at {exp}")

    def _parse_expiration(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"exp is a boolean: {value}")
        elif isinstance(value, int):
            return value
        elif isinstance(value, float) and math.isfinite(value):
            return int(value)
        elif isinstance(value, str) and re.fullmatch(EXPIRATION_REGEX, value):
            # Raises ValueError above the interpreter's digit limit.
            return int(value)
        else:
            kind = type(value).__name__
            raise ValueError(f"exp has unsupported type {kind}")

    def _parse_json(self, segment: str) -> dict[str, Any]:
        try:
            text = base64url_decode(segment).decode("utf-8")
            data = json.loads(text, parse_constant=_reject_constant)
        except RecursionError as e:
            raise ValueError("JSON is nested too deeply") from e
        if not isinstance(data, dict):
            raise ValueError("Not a JSON object")
        return data

    def _parse_payload(self, segment: str) -> Claims:
        try:
            return Claims(self._parse_json(segment))
        except ValueError as e:
            msg = f"Invalid token payload: {e!s}"
            self._logger.warning("Cannot decode token payload", error=str(e))
            raise InvalidPayloadError(msg) from e

    def _serialize(self, data: Mapping[str, Any]) -> bytes:
        try:
            return json.dumps(
                data, separators=(",", ":"), allow_nan=False
            ).encode()
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize token: {e!s}") from e


def encode(
    payload: Mapping[str, Any], algorithm: Algorithm | None = None
) -> str:
    """Encode a token with the default codec.

    See `TokenCodec.encode` for details.
    """
    return TokenCodec().encode(payload, algorithm)


def decode(
    token: str, algorithms: Algorithm | Iterable[Algorithm] | None = None
) -> Claims:
    """Decode and verify a token with the default codec.

    The default codec is configured from the environment.  See
    `TokenCodec.decode` for details.
    """
    return TokenCodec().decode(token, algorithms)


def get_unverified_header(token: str) -> dict[str, Any]:
    """Return the header of a token without verifying it."""
    return TokenCodec().get_unverified_header(token)

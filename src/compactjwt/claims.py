"""Representation of the claims carried in a token."""

from __future__ import annotations

from typing import Any

from safir.datetime import current_datetime

__all__ = ["Claims"]


class Claims(dict[str, Any]):
    """The payload of a token.

    Claims are an open mapping of claim names to JSON values.  The registered
    claims ``iss``, ``sub``, ``iat``, and ``exp`` are available as properties
    for convenience.  Reading a property returns `None` if the claim is
    missing or has the wrong type; setting a property to `None` removes the
    claim.

    Only ``exp`` is enforced when a token is decoded.
    """

    @property
    def iss(self) -> str | None:
        """Issuer of the token."""
        return self._get_str("iss")

    @iss.setter
    def iss(self, value: str | None) -> None:
        self._set_or_remove("iss", value)

    @property
    def sub(self) -> str | None:
        """Subject of the token."""
        return self._get_str("sub")

    @sub.setter
    def sub(self, value: str | None) -> None:
        self._set_or_remove("sub", value)

    @property
    def iat(self) -> int | None:
        """Issue time of the token in seconds since epoch."""
        return self._get_int("iat")

    @iat.setter
    def iat(self, value: int | None) -> None:
        self._set_or_remove("iat", value)

    @property
    def exp(self) -> int | None:
        """Expiration time of the token in seconds since epoch."""
        return self._get_int("exp")

    @exp.setter
    def exp(self, value: int | None) -> None:
        self._set_or_remove("exp", value)

    def expire_after(self, seconds: int, *, now: int | None = None) -> None:
        """Set the issue time to now and the expiration relative to it.

        Parameters
        ----------
        seconds
            Lifetime of the token in seconds.
        now
            Issue time to use instead of the current time.
        """
        if now is None:
            now = int(current_datetime().timestamp())
        self.iat = now
        self.exp = now + seconds

    def _get_int(self, key: str) -> int | None:
        value = self.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def _get_str(self, key: str) -> str | None:
        value = self.get(key)
        return value if isinstance(value, str) else None

    def _set_or_remove(self, key: str, value: Any) -> None:
        if value is None:
            self.pop(key, None)
        else:
            self[key] = value

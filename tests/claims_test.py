"""Tests for token claims."""

from __future__ import annotations

from safir.datetime import current_datetime

from compactjwt.claims import Claims


def test_registered_claims() -> None:
    claims = Claims()
    assert claims.iss is None
    assert claims.sub is None
    assert claims.iat is None
    assert claims.exp is None

    claims.iss = "https://example.com/"
    claims.sub = "alice"
    claims.iat = 1000
    claims.exp = 2000
    assert claims == {
        "iss": "https://example.com/",
        "sub": "alice",
        "iat": 1000,
        "exp": 2000,
    }

    claims.sub = None
    claims.exp = None
    assert claims == {"iss": "https://example.com/", "iat": 1000}

    # Removing a claim that isn't present is not an error.
    claims.sub = None
    assert "sub" not in claims


def test_wrong_types() -> None:
    claims = Claims(iss=12, sub=["alice"], iat="1000", exp=True, other="x")
    assert claims.iss is None
    assert claims.sub is None
    assert claims.iat is None
    assert claims.exp is None
    assert claims["exp"] is True
    assert claims["other"] == "x"


def test_expire_after() -> None:
    claims = Claims(sub="alice")
    claims.expire_after(3600, now=1000)
    assert claims == {"sub": "alice", "iat": 1000, "exp": 4600}

    now = int(current_datetime().timestamp())
    claims.expire_after(60)
    assert claims.iat is not None
    assert claims.exp == claims.iat + 60
    assert now <= claims.iat <= now + 5

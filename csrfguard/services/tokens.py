from __future__ import annotations

import secrets

TOKEN_BYTES = 32


def generate_token() -> str:
    """Return a fresh CSRF secret: 32 random bytes as 64 lowercase hex characters.

    There is no fallback RNG. If the OS source of randomness is unavailable the
    error propagates, since the cookie pair is worthless without it.
    """
    return secrets.token_hex(TOKEN_BYTES)

from __future__ import annotations

from typing import Optional

from .deps import FastAPIJWSAuth, bearer_scheme
from ...adapters.pyjwt.jws_adapter import PyJWTAdapter
from ...domain.constants import DEFAULT_KEYSET
from ...settings import JWSSettings


def create_fastapi_auth(
    settings: JWSSettings,
    *,
    keyset: str = DEFAULT_KEYSET,
    cookie_name: Optional[str] = None,
) -> FastAPIJWSAuth:
    """
    High-level helper for FastAPI apps:

    - Builds a PyJWTAdapter over the given settings
    - Wraps it in FastAPIJWSAuth, exposing dependencies like:

        fastapi_auth.get_claims
        fastapi_auth.get_optional_claims

    Pass ``cookie_name`` to also accept the token from that cookie.
    """
    return FastAPIJWSAuth(
        adapter=PyJWTAdapter(settings),
        keyset=keyset,
        cookie_name=cookie_name,
    )


__all__ = ["FastAPIJWSAuth", "bearer_scheme", "create_fastapi_auth"]

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol


class JWSAdapter(Protocol):
    """
    Port for signing claims into a compact token and verifying it back.

    Implementations live in the adapters layer (e.g. the PyJWT adapter).
    """

    def encode(
        self,
        payload: Mapping[str, Any],
        keyset: str = ...,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Sign ``payload`` with the first key of ``keyset``.

        Raises:
          - InvalidKeysetError
          - AdapterConfigurationError
        """
        ...

    def decode(self, token: str, keyset: str = ...) -> dict[str, Any]:
        """
        Verify the given token against ``keyset`` and return its claims.

        Should:
          - verify signature
          - check exp / nbf / iat
        Raises:
          - InvalidKeysetError
          - AdapterConfigurationError
          - InvalidTokenError
          - TokenExpiredError
          - TokenNotYetValidError
        """
        ...

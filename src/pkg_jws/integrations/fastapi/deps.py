from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...domain.constants import DEFAULT_KEYSET
from ...domain.exceptions import (
    AuthenticationError,
    ConfigurationError,
    TokenExpiredError,
    TokenNotYetValidError,
)
from ...domain.ports import JWSAdapter

# Shown in OpenAPI; missing credentials are handled by FastAPIJWSAuth itself
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(slots=True)
class FastAPIJWSAuth:
    """
    FastAPI integration for pkg_jws.

    Verifies the request's token against one keyset and hands the claims
    to the endpoint. Mapping claims to users is left to the application.

    The token is read from the Bearer header, or from ``cookie_name``
    when one is set.
    """

    adapter: JWSAdapter
    keyset: str = DEFAULT_KEYSET
    cookie_name: Optional[str] = None

    def token_from_request(
            self,
            request: Request,
            credentials: Optional[HTTPAuthorizationCredentials],
    ) -> Optional[str]:
        if credentials is not None and credentials.credentials.strip():
            return credentials.credentials.strip()
        if self.cookie_name:
            return request.cookies.get(self.cookie_name) or None
        return None

    def verify(self, token: str) -> Dict[str, Any]:
        """Decode ``token`` against this keyset, as an HTTP error on failure."""
        try:
            return self.adapter.decode(token, self.keyset)
        except TokenExpiredError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token expired",
            ) from exc
        except TokenNotYetValidError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token not yet valid",
            ) from exc
        except AuthenticationError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token",
            ) from exc
        except ConfigurationError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Token verification unavailable",
            ) from exc

    # ------------------------------------------------------------------ #
    # Dependencies
    # ------------------------------------------------------------------ #

    async def get_claims(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> Dict[str, Any]:
        """Dependency: Require a verified token."""
        token = self.token_from_request(request, credentials)
        if token is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return self.verify(token)

    async def get_optional_claims(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> Optional[Dict[str, Any]]:
        """Dependency: Optional token; absent or untrusted -> anonymous."""
        token = self.token_from_request(request, credentials)
        if token is None:
            return None

        try:
            return self.verify(token)
        except HTTPException as exc:
            if exc.status_code == status.HTTP_401_UNAUTHORIZED:
                return None
            raise

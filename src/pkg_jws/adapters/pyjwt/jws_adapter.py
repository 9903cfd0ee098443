import logging
from typing import Any, Dict, Mapping, Optional

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    ImmatureSignatureError,
    InvalidKeyError,
    InvalidSignatureError,
    InvalidTokenError as JWTInvalidTokenError,
    PyJWTError,
)

from ...domain.constants import DEFAULT_KEYSET, KeyUse
from ...domain.exceptions import (
    AdapterConfigurationError,
    InvalidTokenError,
    TokenExpiredError,
    TokenNotYetValidError,
)
from ...domain.ports import JWSAdapter
from ...settings import JWSSettings
from .key_resolver import KeyResolver, ResolvedKey, ResolvedKeys

logger = logging.getLogger(__name__)

# claims carry no schema here; only signature and exp / nbf / iat are checked
_DECODE_OPTIONS = {"verify_aud": False, "verify_sub": False, "verify_jti": False}


class PyJWTAdapter(JWSAdapter):
    """
    Adapter implementing JWSAdapter port using PyJWT.

    Infrastructure layer:
    - Knows which configured key signs or verifies a token.
    - Translates PyJWT failures into the domain exceptions.
    """

    def __init__(
        self,
        settings: JWSSettings,
        resolver: Optional[KeyResolver] = None,
    ) -> None:
        self._settings = settings
        self._resolver = resolver or KeyResolver(settings)

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def encode(
        self,
        payload: Mapping[str, Any],
        keyset: str = DEFAULT_KEYSET,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Sign claims with the first key of ``keyset``.

        The configured algorithm and key id take precedence over the
        same names in ``headers``.

        Raises:
            InvalidKeysetError
            AdapterConfigurationError
        """
        signing_key = self._resolver.resolve(keyset, KeyUse.SIGN)

        header: Dict[str, Any] = dict(headers or {})
        header.pop("alg", None)
        if signing_key.key_id is not None:
            header["kid"] = signing_key.key_id

        try:
            return jwt.encode(
                dict(payload),
                signing_key.key,
                algorithm=signing_key.algorithm,
                headers=header or None,
            )
        except (PyJWTError, NotImplementedError, ValueError, TypeError) as exc:
            # unusable key, or a header PyJWT refuses (e.g. non-string kid)
            raise AdapterConfigurationError(f"Cannot encode JWT: {exc}") from exc

    def decode(self, token: str, keyset: str = DEFAULT_KEYSET) -> Dict[str, Any]:
        """
        Verify signature and exp / nbf / iat, then return the claims.

        Raises:
            InvalidKeysetError
            AdapterConfigurationError
            InvalidTokenError
            TokenExpiredError
            TokenNotYetValidError
        """
        keys = self._resolver.resolve(keyset, KeyUse.VERIFY)

        try:
            key = self._select_key(token, keys)
            return jwt.decode(
                token,
                key.key,
                algorithms=[key.algorithm],
                leeway=self._settings.leeway,
                options=_DECODE_OPTIONS,
            )
        except (InvalidKeyError, NotImplementedError) as exc:
            # key does not fit its algorithm, or the crypto backend failed
            raise AdapterConfigurationError(f"Cannot decode JWT: {exc}") from exc
        except InvalidSignatureError as exc:
            raise InvalidTokenError("Invalid token signature") from exc
        except ImmatureSignatureError as exc:
            # nbf or iat in the future
            raise TokenNotYetValidError(f"Token is not yet valid: {exc}") from exc
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired") from exc
        except JWTInvalidTokenError as exc:
            # malformed token, missing / disallowed alg, bad kid, bad claim types:
            # either hostile input or a misconfigured keyset, so keep a trail
            logger.error(
                "[pkg_jws] %s.decode: %s: %s",
                type(self).__name__,
                type(exc).__name__,
                exc,
            )
            raise InvalidTokenError(f"Invalid token: {exc}") from exc

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _select_key(token: str, keys: ResolvedKeys) -> ResolvedKey:
        if isinstance(keys, ResolvedKey):
            return keys

        kid = jwt.get_unverified_header(token).get("kid")
        if not kid:
            raise DecodeError('"kid" empty, unable to lookup correct key')
        if not isinstance(kid, str) or kid not in keys:
            raise DecodeError(f'"kid" {kid!r} invalid, unable to lookup correct key')
        return keys[kid]

"""
pkg_jws

Keyset-based JWT signing and verification for authentication frameworks.
Wraps PyJWT and reports every failure as one of a small set of domain
exceptions.
"""

__version__ = "0.1.0"

from .domain.constants import DEFAULT_KEYSET, KeyUse
from .domain.exceptions import (
    ConfigurationError,
    InvalidKeysetError,
    AdapterConfigurationError,
    AuthenticationError,
    InvalidTokenError,
    TokenExpiredError,
    TokenNotYetValidError,
)
from .domain.value_objects import (
    SymmetricKey,
    AsymmetricKeyPair,
    KeyMaterial,
    KeyEntry,
    Keyset,
)
from .domain.ports import JWSAdapter
from .settings import JWSSettings
from .env import settings_from_env, create_jws_adapter_from_env

from .adapters.pyjwt.key_resolver import KeyResolver, ResolvedKey, ResolvedKeys
from .adapters.pyjwt.jws_adapter import PyJWTAdapter

__all__ = [
    "__version__",
    # domain core
    "DEFAULT_KEYSET",
    "KeyUse",
    "SymmetricKey",
    "AsymmetricKeyPair",
    "KeyMaterial",
    "KeyEntry",
    "Keyset",
    "JWSAdapter",
    # exceptions
    "ConfigurationError",
    "InvalidKeysetError",
    "AdapterConfigurationError",
    "AuthenticationError",
    "InvalidTokenError",
    "TokenExpiredError",
    "TokenNotYetValidError",
    # configuration
    "JWSSettings",
    "settings_from_env",
    "create_jws_adapter_from_env",
    # adapters
    "KeyResolver",
    "ResolvedKey",
    "ResolvedKeys",
    "PyJWTAdapter",
]

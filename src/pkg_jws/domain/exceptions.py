class ConfigurationError(Exception):
    """Raised when key configuration cannot be used."""
    pass


class InvalidKeysetError(ConfigurationError):
    """Raised when a keyset is unknown, empty or holds a malformed entry."""
    pass


class AdapterConfigurationError(ConfigurationError):
    """
    Raised on unsupported algorithms, keys that do not fit their algorithm,
    or failures inside the cryptographic backend. A server-side bug, never
    the client's fault.
    """
    pass


class AuthenticationError(Exception):
    """Raised when a token cannot be trusted."""
    pass


class InvalidTokenError(AuthenticationError):
    """Raised when token is malformed or its signature does not verify."""
    pass


class TokenExpiredError(AuthenticationError):
    """Raised when token has expired."""
    pass


class TokenNotYetValidError(AuthenticationError):
    """Raised when token is used before its "nbf" or "iat" time."""
    pass

from __future__ import annotations

import json
import os

from .adapters.pyjwt.jws_adapter import PyJWTAdapter
from .settings import JWSSettings

KEYS_ENV = "JWS_KEYS"
LEEWAY_ENV = "JWS_LEEWAY"


def settings_from_env() -> JWSSettings:
    """
    Read keysets from ``JWS_KEYS`` (JSON object, see
    ``JWSSettings.from_mapping``) and clock leeway from ``JWS_LEEWAY``.
    """
    def _int(key: str, default: int = 0) -> int:
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw)
        except ValueError as exc:
            raise RuntimeError(f"{key} must be an integer, got {raw!r}") from exc

    raw_keys = os.getenv(KEYS_ENV)
    if not raw_keys:
        raise RuntimeError(f"Missing JWS settings: {KEYS_ENV}")

    try:
        keys = json.loads(raw_keys)
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"{KEYS_ENV} is not valid JSON: {exc}") from exc

    if not isinstance(keys, dict):
        raise RuntimeError(f"{KEYS_ENV} must be a JSON object of keysets")

    return JWSSettings.from_mapping(keys, leeway=_int(LEEWAY_ENV, 0))


def create_jws_adapter_from_env() -> PyJWTAdapter:
    """Convenience wrapper using env-configured settings."""
    return PyJWTAdapter(settings_from_env())

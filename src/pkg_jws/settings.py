from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .domain.exceptions import InvalidKeysetError
from .domain.value_objects import KeyEntry, Keyset


@dataclass(frozen=True, slots=True)
class JWSSettings:
    """
    Immutable snapshot of the configured keysets.

    Host code decides how to construct this (env, config file, etc.) and
    hands it to the adapter; nothing here reads process-wide state.
    """
    keysets: Mapping[str, Keyset] = field(default_factory=dict)

    # seconds of clock skew tolerated for exp / nbf / iat
    leeway: int = 0

    def __post_init__(self) -> None:
        for name, keyset in self.keysets.items():
            if not isinstance(keyset, Keyset):
                raise InvalidKeysetError(
                    f'Invalid Keyset: "{name}". Expected Keyset, got {type(keyset).__name__}'
                )
            if keyset.name != name:
                raise InvalidKeysetError(
                    f'Invalid Keyset: "{name}". Configured under a different name '
                    f'than its own ("{keyset.name}")'
                )
        object.__setattr__(self, "keysets", MappingProxyType(dict(self.keysets)))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], *, leeway: int = 0) -> "JWSSettings":
        """
        Build settings from a plain dict of keyset name -> list of key records::

            {
                "default": [{"alg": "HS256", "secret": "..."}],
                "rotating": [
                    {"alg": "RS256", "kid": "2024", "public": "...", "private": "..."},
                    {"alg": "RS256", "kid": "2023", "public": "..."},
                ],
            }
        """
        keysets: dict[str, Keyset] = {}
        for name, records in raw.items():
            if not isinstance(records, (list, tuple)):
                raise InvalidKeysetError(
                    f'Invalid Keyset: "{name}". Expected a list of keys'
                )
            keysets[name] = Keyset(
                name=name,
                entries=tuple(KeyEntry.from_mapping(r) for r in records),
            )
        return cls(keysets=keysets, leeway=leeway)

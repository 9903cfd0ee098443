from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from jwt.algorithms import get_default_algorithms

from ...domain.constants import KeyUse
from ...domain.exceptions import AdapterConfigurationError, InvalidKeysetError
from ...domain.value_objects import AsymmetricKeyPair, KeyEntry, Keyset, SymmetricKey
from ...settings import JWSSettings


@dataclass(frozen=True, slots=True)
class ResolvedKey:
    """
    Key material in the form PyJWT consumes, plus its algorithm and key id.

    ``key`` is a secret, PEM text, or an already loaded ``cryptography``
    private key (when a passphrase had to be applied).
    """
    key: Any
    algorithm: str
    key_id: Optional[str] = None


ResolvedKeys = Union[ResolvedKey, Dict[str, ResolvedKey]]


class KeyResolver:
    """
    Turns a keyset name into the key (or key-id -> key map) needed to
    sign or verify a token.

    Reads the injected settings only; holds no mutable state.
    """

    def __init__(self, settings: JWSSettings) -> None:
        self._settings = settings

    def keyset(self, name: str) -> Keyset:
        try:
            return self._settings.keysets[name]
        except KeyError:
            raise InvalidKeysetError(
                f'Invalid Keyset: "{name}". No such keyset configured'
            ) from None

    def resolve(self, name: str, use: KeyUse) -> ResolvedKeys:
        """
        SIGN   -> the first entry of the keyset, always.
        VERIFY -> a single key, or a key-id map when several are configured.

        Raises:
            InvalidKeysetError
            AdapterConfigurationError
        """
        keyset = self.keyset(name)

        if use is KeyUse.SIGN:
            return self._signing_key(keyset, keyset.primary)

        if not keyset.is_multi_key:
            return self._verification_key(keyset, keyset.primary)

        return {
            entry.key_id: self._verification_key(keyset, entry)
            for entry in keyset.entries
        }

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _verification_key(self, keyset: Keyset, entry: KeyEntry) -> ResolvedKey:
        self._check_algorithm(entry)
        material = entry.material

        if isinstance(material, SymmetricKey):
            key: Any = material.secret
        elif material.public_key:
            key = material.public_key
        else:
            raise InvalidKeysetError(
                f'Invalid Keyset: "{keyset.name}". '
                f"Key {entry.key_id or '#0'} has no public key for verification"
            )

        return ResolvedKey(key=key, algorithm=entry.algorithm, key_id=entry.key_id)

    def _signing_key(self, keyset: Keyset, entry: KeyEntry) -> ResolvedKey:
        self._check_algorithm(entry)
        material = entry.material

        if isinstance(material, SymmetricKey):
            key: Any = material.secret
        elif material.private_key:
            key = self._load_private_key(material)
        else:
            raise InvalidKeysetError(
                f'Invalid Keyset: "{keyset.name}". '
                "First key has no private key for signing"
            )

        return ResolvedKey(key=key, algorithm=entry.algorithm, key_id=entry.key_id)

    @staticmethod
    def _load_private_key(material: AsymmetricKeyPair) -> Any:
        # Without a passphrase PyJWT loads the PEM itself.
        if not material.passphrase:
            return material.private_key

        passphrase = material.passphrase
        if isinstance(passphrase, str):
            passphrase = passphrase.encode()

        try:
            return serialization.load_pem_private_key(
                material.private_key.encode(),
                password=passphrase,
            )
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise AdapterConfigurationError(
                f"Cannot load private key: {exc}"
            ) from exc

    @staticmethod
    def _check_algorithm(entry: KeyEntry) -> None:
        if entry.algorithm == "none" or entry.algorithm not in get_default_algorithms():
            raise AdapterConfigurationError(
                f"Unsupported algorithm: {entry.algorithm}"
            )

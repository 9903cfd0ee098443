# src/pkg_jws/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple, Union

from .exceptions import InvalidKeysetError


# --- Key material ---------------------------------------------------------


def _pem_text(name: str, value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("ascii")
        except UnicodeDecodeError:
            raise InvalidKeysetError(f"{name} is not PEM text") from None
    raise InvalidKeysetError(
        f"{name} must be PEM text, got {type(value).__name__}"
    )


@dataclass(frozen=True, slots=True)
class SymmetricKey:
    """
    Shared secret used for both signing and verification (HS* algorithms).
    """
    secret: Union[str, bytes] = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.secret, (str, bytes)):
            raise InvalidKeysetError(
                f"Symmetric key secret must be str or bytes, got {type(self.secret).__name__}"
            )
        if not self.secret:
            raise InvalidKeysetError("Symmetric key secret must not be empty")


@dataclass(frozen=True, slots=True)
class AsymmetricKeyPair:
    """
    PEM encoded key pair for RS*, PS*, ES* and EdDSA algorithms.

    Either half may be missing when the keyset is only used in one
    direction: verification needs ``public_key``, signing ``private_key``.
    ``passphrase`` is applied to ``private_key`` only when non-empty.
    PEM given as bytes is stored as text.
    """
    public_key: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)
    passphrase: Optional[Union[str, bytes]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for name in ("public_key", "private_key"):
            object.__setattr__(self, name, _pem_text(name, getattr(self, name)))

        if self.passphrase is not None and not isinstance(self.passphrase, (str, bytes)):
            raise InvalidKeysetError(
                f"passphrase must be str or bytes, got {type(self.passphrase).__name__}"
            )
        if not self.public_key and not self.private_key:
            raise InvalidKeysetError(
                "Asymmetric key pair needs a public or a private key"
            )


KeyMaterial = Union[SymmetricKey, AsymmetricKeyPair]


@dataclass(frozen=True, slots=True)
class KeyEntry:
    """
    One configured key: algorithm, optional key id and its material.
    """
    algorithm: str
    material: KeyMaterial
    key_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.algorithm:
            raise InvalidKeysetError("Key entry is missing its algorithm")
        if not isinstance(self.algorithm, str):
            raise InvalidKeysetError(
                f"Key algorithm must be a string, got {type(self.algorithm).__name__}"
            )
        if self.key_id is not None and not isinstance(self.key_id, str):
            raise InvalidKeysetError(
                f"Key id must be a string, got {type(self.key_id).__name__}"
            )
        if not isinstance(self.material, (SymmetricKey, AsymmetricKeyPair)):
            raise InvalidKeysetError(
                f"Unsupported key material: {type(self.material).__name__}"
            )
        # "" means "no key id"; it is never embedded literally
        if self.key_id == "":
            object.__setattr__(self, "key_id", None)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "KeyEntry":
        """
        Build an entry from a config record such as::

            {"alg": "HS256", "kid": "a", "secret": "..."}
            {"alg": "RS256", "public": "-----BEGIN ...", "private": "...",
             "passphrase": "..."}

        Exactly one of ``secret`` or ``public``/``private`` must be given.
        """
        if not isinstance(raw, Mapping):
            raise InvalidKeysetError(
                f"Key entry must be a mapping, got {type(raw).__name__}"
            )

        has_secret = raw.get("secret") is not None
        has_pair = raw.get("public") is not None or raw.get("private") is not None
        if has_secret == has_pair:
            raise InvalidKeysetError(
                "Key entry must define either 'secret' or 'public'/'private'"
            )

        material: KeyMaterial
        if has_secret:
            material = SymmetricKey(raw["secret"])
        else:
            material = AsymmetricKeyPair(
                public_key=raw.get("public"),
                private_key=raw.get("private"),
                passphrase=raw.get("passphrase"),
            )

        return cls(
            algorithm=raw.get("alg") or "",
            material=material,
            key_id=raw.get("kid"),
        )


# --- Keyset ---------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Keyset:
    """
    Named, ordered group of keys used together for one purpose.

    - Signing always uses the first entry.
    - With more than one entry, verification selects by key id, so every
      entry needs a distinct one.
    """

    name: str
    entries: Tuple[KeyEntry, ...]

    def __post_init__(self) -> None:
        entries = tuple(self.entries)
        object.__setattr__(self, "entries", entries)

        if not entries:
            raise InvalidKeysetError(f'Invalid Keyset: "{self.name}". No keys configured')

        if len(entries) > 1:
            seen: set[str] = set()
            for entry in entries:
                if entry.key_id is None:
                    raise InvalidKeysetError(
                        f'Invalid Keyset: "{self.name}". Every key needs a "kid" '
                        "when more than one key is configured"
                    )
                if entry.key_id in seen:
                    raise InvalidKeysetError(
                        f'Invalid Keyset: "{self.name}". Duplicate kid "{entry.key_id}"'
                    )
                seen.add(entry.key_id)

    @property
    def primary(self) -> KeyEntry:
        return self.entries[0]

    @property
    def is_multi_key(self) -> bool:
        return len(self.entries) > 1

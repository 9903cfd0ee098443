# tests/conftest.py
from __future__ import annotations

from dataclasses import dataclass

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519, rsa

from pkg_jws import JWSSettings, PyJWTAdapter

PASSPHRASE = "correct horse battery staple"
HS_SECRET = "an-hs256-secret-that-is-at-least-32-bytes-long"


@dataclass(frozen=True)
class PemPair:
    public: str
    private: str


def _public_pem(private_key) -> str:
    return private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


def _private_pem(private_key, encryption=None) -> str:
    return private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        encryption or serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_pem(rsa_key) -> PemPair:
    return PemPair(public=_public_pem(rsa_key), private=_private_pem(rsa_key))


@pytest.fixture(scope="session")
def encrypted_rsa_pem(rsa_key) -> PemPair:
    return PemPair(
        public=_public_pem(rsa_key),
        private=_private_pem(
            rsa_key,
            serialization.BestAvailableEncryption(PASSPHRASE.encode()),
        ),
    )


@pytest.fixture(scope="session")
def other_rsa_pem() -> PemPair:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return PemPair(public=_public_pem(key), private=_private_pem(key))


@pytest.fixture(scope="session")
def ed25519_pem() -> PemPair:
    key = ed25519.Ed25519PrivateKey.generate()
    return PemPair(public=_public_pem(key), private=_private_pem(key))


@pytest.fixture
def make_adapter():
    def _make(keys: dict, leeway: int = 0) -> PyJWTAdapter:
        return PyJWTAdapter(JWSSettings.from_mapping(keys, leeway=leeway))

    return _make

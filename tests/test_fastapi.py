# tests/test_fastapi.py
from typing import Any, Dict, Optional

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from pkg_jws import AuthenticationError, JWSSettings, PyJWTAdapter
from pkg_jws.integrations.fastapi import FastAPIJWSAuth, create_fastapi_auth

from conftest import HS_SECRET

KEYS = {
    "default": [{"alg": "HS256", "secret": HS_SECRET}],
    "broken": [{"alg": "XX256", "secret": HS_SECRET}],
}


def _app(keyset: str = "default", cookie_name: Optional[str] = None) -> FastAPI:
    fastapi_auth = create_fastapi_auth(
        JWSSettings.from_mapping(KEYS), keyset=keyset, cookie_name=cookie_name
    )
    app = FastAPI()

    @app.get("/me")
    async def me(claims: Dict[str, Any] = Depends(fastapi_auth.get_claims)):
        return claims

    @app.get("/maybe")
    async def maybe(claims: Optional[Dict[str, Any]] = Depends(fastapi_auth.get_optional_claims)):
        return {"claims": claims}

    return app


@pytest.fixture
def adapter() -> PyJWTAdapter:
    return PyJWTAdapter(JWSSettings.from_mapping(KEYS))


@pytest.fixture
def client() -> TestClient:
    return TestClient(_app())


def test_bearer_token(client, adapter):
    token = adapter.encode({"sub": "u1"})

    r = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert r.status_code == 200
    assert r.json() == {"sub": "u1"}


def test_cookie_token(adapter):
    client = TestClient(_app(cookie_name="access_token"))
    client.cookies.set("access_token", adapter.encode({"sub": "u1"}))

    r = client.get("/me")

    assert r.status_code == 200
    assert r.json() == {"sub": "u1"}


def test_cookie_ignored_unless_configured(client, adapter):
    client.cookies.set("access_token", adapter.encode({"sub": "u1"}))

    r = client.get("/me")

    assert r.status_code == 401
    assert r.json()["detail"] == "Not authenticated"
    assert r.headers["www-authenticate"] == "Bearer"


def test_missing_token(client):
    r = client.get("/me")

    assert r.status_code == 401
    assert r.json()["detail"] == "Not authenticated"


@pytest.mark.parametrize(
    "claims, detail",
    [
        ({"sub": "u1", "exp": 1}, "Token expired"),
        ({"sub": "u1", "nbf": 4102444800}, "Token not yet valid"),
    ],
)
def test_temporal_failures(client, adapter, claims, detail):
    token = adapter.encode(claims)

    r = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert r.status_code == 401
    assert r.json()["detail"] == detail


def test_invalid_token(client):
    r = client.get("/me", headers={"Authorization": "Bearer not-a-token"})

    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid token"


def test_configuration_error_is_server_error(adapter):
    client = TestClient(_app(keyset="broken"))
    token = adapter.encode({"sub": "u1"})

    r = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert r.status_code == 500
    assert r.json()["detail"] == "Token verification unavailable"


def test_optional_claims(client, adapter):
    assert client.get("/maybe").json() == {"claims": None}
    assert client.get(
        "/maybe", headers={"Authorization": "Bearer not-a-token"}
    ).json() == {"claims": None}

    token = adapter.encode({"sub": "u1"})
    assert client.get(
        "/maybe", headers={"Authorization": f"Bearer {token}"}
    ).json() == {"claims": {"sub": "u1"}}


def test_any_authentication_error_is_unauthorized():
    class RejectingAdapter:
        def decode(self, token, keyset):
            raise AuthenticationError("rejected")

    fastapi_auth = FastAPIJWSAuth(adapter=RejectingAdapter())
    app = FastAPI()

    @app.get("/me")
    async def me(claims: Dict[str, Any] = Depends(fastapi_auth.get_claims)):
        return claims

    r = TestClient(app).get("/me", headers={"Authorization": "Bearer t"})

    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid token"

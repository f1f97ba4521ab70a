import jwt
import pytest

from auth import security

SETTINGS = security.TokenSettings(secret="test-secret", lifetime_s=3600)


def _register(client, **overrides):
    body = {"name": "Manager", "email": "Boss@EliteClub.test", "password": "correct-horse"}
    body.update(overrides)
    return client.post("/api/register", json=body)


def test_password_hash_verifies_only_matching_password():
    hashed = security.hash_password("correct-horse")

    assert hashed != "correct-horse"
    assert security.verify_password("correct-horse", hashed)
    assert not security.verify_password("wrong-horse", hashed)
    assert not security.verify_password("correct-horse", "not-a-bcrypt-hash")


def test_empty_password_cannot_be_hashed():
    with pytest.raises(security.AuthSecurityError):
        security.hash_password("")


def test_password_over_bcrypt_limit_cannot_be_hashed():
    # 36 characters, 72 bytes: still fits.
    assert security.password_fits_bcrypt("é" * 36)
    assert not security.password_fits_bcrypt("é" * 37)

    with pytest.raises(security.AuthSecurityError):
        security.hash_password("a" * 73)
    assert not security.verify_password("a" * 73, security.hash_password("a" * 72))


def test_token_carries_admin_claims_for_one_hour():
    token = security.issue_admin_token(admin_id="abc", email="a@b.test", settings=SETTINGS, now=1_700_000_000)

    claims = jwt.decode(token, "test-secret", algorithms=["HS256"], options={"verify_exp": False})

    assert claims == {"id": "abc", "email": "a@b.test", "iat": 1_700_000_000, "exp": 1_700_003_600}


def test_token_lifetime_defaults_to_an_hour(monkeypatch):
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MIN", raising=False)
    assert security.TokenSettings.from_env().lifetime_s == 3600

    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MIN", "15")
    assert security.TokenSettings.from_env().lifetime_s == 900


def test_expired_token_is_rejected():
    token = security.issue_admin_token(admin_id="abc", email="a@b.test", settings=SETTINGS, now=1_000)

    with pytest.raises(security.AuthSecurityError, match="expired"):
        security.read_admin_token(token, settings=SETTINGS)


@pytest.mark.parametrize(
    "claims,secret",
    [
        ({"email": "a@b.test", "exp": 4_000_000_000}, "test-secret"),
        ({"id": "abc", "exp": 4_000_000_000}, "some-other-secret"),
    ],
)
def test_token_without_id_or_with_foreign_signature_is_rejected(claims, secret):
    token = jwt.encode(claims, secret, algorithm="HS256")

    with pytest.raises(security.AuthSecurityError):
        security.read_admin_token(token, settings=SETTINGS)


def test_register_returns_token_and_user(client):
    resp = _register(client)

    assert resp.status_code == 201
    data = resp.json()
    assert data["token"]
    assert data["user"]["name"] == "Manager"
    assert data["user"]["email"] == "boss@eliteclub.test"
    assert "password" not in data["user"]


def test_register_existing_email_is_rejected(client):
    _register(client)

    resp = _register(client, email="boss@eliteclub.test")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "User already exists"


def test_register_short_password_is_validation_error(client):
    resp = _register(client, password="short")

    assert resp.status_code == 400


def test_login_with_valid_credentials(client):
    _register(client)

    resp = client.post("/api/login", json={"email": "boss@eliteclub.test", "password": "correct-horse"})

    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "boss@eliteclub.test"


@pytest.mark.parametrize(
    "email,password",
    [("boss@eliteclub.test", "wrong-horse"), ("nobody@eliteclub.test", "correct-horse")],
)
def test_login_with_bad_credentials(client, email, password):
    _register(client)

    resp = client.post("/api/login", json={"email": email, "password": password})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid credentials"


def test_me_requires_bearer_token(client):
    assert client.get("/api/me").status_code == 401
    assert client.get("/api/me", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/api/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_me_returns_current_admin(client):
    token = _register(client).json()["token"]

    resp = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 200
    assert resp.json()["email"] == "boss@eliteclub.test"


@pytest.mark.parametrize("password", ["a" * 100, "é" * 40])
def test_register_password_over_bcrypt_limit_is_rejected(client, repos, password):
    resp = _register(client, password=password)

    assert resp.status_code == 400
    assert "72 bytes" in resp.json()["detail"]
    assert repos.admins.rows == {}


def test_login_with_over_long_password_is_invalid_credentials(client):
    _register(client)

    resp = client.post("/api/login", json={"email": "boss@eliteclub.test", "password": "a" * 100})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid credentials"

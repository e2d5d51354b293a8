import pytest

from app.core.auth import (
    SIGNED_IN,
    SIGNED_OUT,
    AuthError,
    DatabaseAuthProvider,
    InMemoryAuthProvider,
    hash_password,
    verify_password,
)
from app.models.user_model import StaffUser

SECRET = "test-secret-with-enough-length-for-hs256"


def test_login_me_logout(client):
    r = client.post("/auth/login", json={"email": "Tresorier@E2D.test", "password": "s3cret"})
    assert r.status_code == 200
    token = r.json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    me = client.get("/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["email"] == "tresorier@e2d.test"

    assert client.post("/auth/logout", headers=headers).status_code == 204
    assert client.get("/auth/me", headers=headers).status_code == 401


def test_bad_credentials(client):
    r = client.post("/auth/login", json={"email": "tresorier@e2d.test", "password": "wrong"})
    assert r.status_code == 401
    assert client.get("/auth/me").status_code == 401


def test_anonymous_writes_have_no_actor(client, make_member):
    m = make_member()
    loan = client.post("/loans/", json={"borrower_id": m["member_id"], "principal_amount": 1000}).json()
    assert loan["granted_by"] is None


def test_password_hashing():
    h = hash_password("correct horse")
    assert h != "correct horse"
    assert verify_password("correct horse", h)
    assert not verify_password("wrong", h)
    assert not verify_password("x", "not-a-bcrypt-hash")


def test_state_change_listeners():
    provider = InMemoryAuthProvider({"a@e2d.test": "pw"})
    events = []
    unsubscribe = provider.on_auth_state_change(lambda event, session: events.append(event))

    session = provider.sign_in("a@e2d.test", "pw")
    provider.sign_out(session.access_token)
    unsubscribe()
    provider.sign_in("a@e2d.test", "pw")

    assert events == [SIGNED_IN, SIGNED_OUT]


def test_database_provider_issues_and_revokes_jwt(session_factory):
    db = session_factory()
    db.add(StaffUser(email="admin@e2d.test", full_name="Admin", password_hash=hash_password("pw"), is_active=True))
    db.commit()
    db.close()

    provider = DatabaseAuthProvider(session_factory, secret=SECRET)
    with pytest.raises(AuthError):
        provider.sign_in("admin@e2d.test", "nope")

    session = provider.sign_in("ADMIN@e2d.test", "pw")
    user = provider.get_current_user(session.access_token)
    assert user.email == "admin@e2d.test"
    assert user.full_name == "Admin"

    assert provider.get_current_user("garbage") is None
    other = DatabaseAuthProvider(session_factory, secret=SECRET + "-other")
    assert other.get_current_user(session.access_token) is None

    provider.sign_out(session.access_token)
    assert provider.get_current_user(session.access_token) is None


def test_inactive_staff_cannot_sign_in(session_factory):
    db = session_factory()
    db.add(StaffUser(email="old@e2d.test", password_hash=hash_password("pw"), is_active=False))
    db.commit()
    db.close()

    with pytest.raises(AuthError):
        DatabaseAuthProvider(session_factory, secret=SECRET).sign_in("old@e2d.test", "pw")


def test_sign_out_prunes_expired_revocations(session_factory):
    db = session_factory()
    db.add(StaffUser(email="admin@e2d.test", password_hash=hash_password("pw"), is_active=True))
    db.commit()
    db.close()

    provider = DatabaseAuthProvider(session_factory, secret=SECRET)
    provider._revoked["stale-jti"] = 1

    first = provider.sign_in("admin@e2d.test", "pw")
    provider.sign_out(first.access_token)
    assert "stale-jti" not in provider._revoked
    assert len(provider._revoked) == 1

    second = provider.sign_in("admin@e2d.test", "pw")
    provider.sign_out(second.access_token)
    assert provider.get_current_user(first.access_token) is None
    assert len(provider._revoked) == 2

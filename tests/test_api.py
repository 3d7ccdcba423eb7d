"""
HTTP tests through FastAPI's TestClient with fresh in-memory state
"""
import inspect

import pytest
from fastapi.testclient import TestClient

from wedding_wagers import state
from wedding_wagers.api import auth
from wedding_wagers.main import app


PASSWORD = "Wedding#2025"


@pytest.fixture
def client():
    state.reset()
    return TestClient(app)


def sign_up(client, email, name):
    res = client.post("/auth/sign-up", json={
        "email": email, "password": PASSWORD, "confirmPassword": PASSWORD, "name": name
    })
    assert res.status_code == 200, res.text
    body = res.json()
    client.post("/auth/verify-email", json={"token": body["verificationToken"]})
    return body["userId"]


def sign_in(client, email):
    res = client.post("/auth/sign-in", json={"email": email, "password": PASSWORD})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def admin(client):
    """Super-admin who has granted themselves the admin role"""
    state.CONFIG.super_admin_email = "boss@example.com"
    sign_up(client, "boss@example.com", "Boss")
    headers = sign_in(client, "boss@example.com")
    res = client.post("/roles/grant-admin", json={"email": "boss@example.com"}, headers=headers)
    assert res.status_code == 200
    return sign_in(client, "boss@example.com")


def create_bets(client, admin):
    cry = client.post("/admin/bets", json={
        "questionText": "Who will cry first?", "kind": "multiple-choice", "options": ["Bride", "Groom"]
    }, headers=admin).json()["bet"]
    objection = client.post("/admin/bets", json={
        "questionText": "Will someone object?", "kind": "multiple-choice", "options": ["Yes", "No"]
    }, headers=admin).json()["bet"]
    return cry["id"], objection["id"]


def test_health(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_sign_up_password_mismatch(client):
    res = client.post("/auth/sign-up", json={
        "email": "a@example.com", "password": PASSWORD, "confirmPassword": "other", "name": "A"
    })
    assert res.status_code == 400
    assert res.json()["detail"] == "Passwords do not match."


def test_unverified_sign_in_rejected(client):
    client.post("/auth/sign-up", json={
        "email": "a@example.com", "password": PASSWORD, "confirmPassword": PASSWORD, "name": "A"
    })
    res = client.post("/auth/sign-in", json={"email": "a@example.com", "password": PASSWORD})
    assert res.status_code == 401


def test_me_and_sign_out(client):
    sign_up(client, "a@example.com", "Alice")
    headers = sign_in(client, "a@example.com")

    me = client.get("/auth/me", headers=headers).json()
    assert me["displayName"] == "Alice"
    assert "token" not in me

    assert client.post("/auth/sign-out", headers=headers).status_code == 200
    assert client.get("/auth/me", headers=headers).status_code == 401


def test_bets_require_session(client):
    assert client.get("/bets").status_code == 401


def test_admin_routes_reject_guests(client):
    sign_up(client, "a@example.com", "Alice")
    headers = sign_in(client, "a@example.com")
    res = client.post("/admin/find-winner", headers=headers)
    assert res.status_code == 403


def test_roles_require_super_admin(client, admin):
    sign_up(client, "a@example.com", "Alice")
    guest = sign_in(client, "a@example.com")

    assert client.post("/roles/grant-admin", json={"email": "a@example.com"}).status_code == 401
    assert client.post("/roles/grant-admin", json={"email": "a@example.com"}, headers=guest).status_code == 403
    assert client.post("/roles/grant-admin", json={"email": "x@example.com"}, headers=admin).status_code == 404
    assert client.post("/roles/grant-admin", json={}, headers=admin).status_code == 400


def test_find_winner_without_key(client, admin):
    res = client.post("/admin/find-winner", headers=admin)
    assert res.status_code == 400
    assert "No answer key found" in res.json()["detail"]


def test_full_game(client, admin):
    """Bets, key, guest answers, winner, publish to homepage"""
    cry, objection = create_bets(client, admin)

    res = client.post("/admin/answer-key", json={"answers": {cry: "Bride"}}, headers=admin)
    assert res.status_code == 400

    res = client.post("/admin/answer-key", json={"answers": {cry: "Bride", objection: "No"}}, headers=admin)
    assert res.status_code == 200
    res = client.post("/admin/answer-key", json={"answers": {cry: "Groom", objection: "No"}}, headers=admin)
    assert res.status_code == 409

    guests = {}
    for email, name in [("alice@example.com", "Alice"), ("bob@example.com", "Bob")]:
        uid = sign_up(client, email, name)
        guests[name] = (uid, sign_in(client, email))

    res = client.post("/admin/find-winner", headers=admin)
    assert res.json()["status"] == "no-submissions"
    assert res.json()["message"] == "No user answers found yet."

    alice_id, alice = guests["Alice"]
    bob_id, bob = guests["Bob"]
    assert client.post("/answers", json={"answers": {cry: "Bride", objection: "No"}}, headers=alice).status_code == 200
    assert client.post("/answers", json={"answers": {cry: "Groom", objection: "No"}}, headers=bob).status_code == 200
    assert client.post("/answers", json={"answers": {cry: "Groom"}}, headers=bob).status_code == 400
    assert len(client.get("/answers/me", headers=alice).json()["submissions"]) == 1

    res = client.post("/admin/find-winner", headers=admin)
    body = res.json()
    assert res.status_code == 200
    assert body["maxScore"] == 2
    assert [u["userName"] for u in body["winners"]] == ["Alice"]
    assert [(u["userId"], u["score"]) for u in body["ranked"]] == [(alice_id, 2), (bob_id, 1)]
    assert body["message"] == "Winner(s) found! Highest score: 2"

    res = client.post("/admin/publish-winners", json={"userIds": [alice_id]}, headers=admin)
    assert res.status_code == 200

    winners = client.get("/winners").json()["winners"]
    assert [(w["userName"], w["score"]) for w in winners] == [("Alice", 2)]
    assert "displayedAt" in winners[0]

    client.post("/admin/publish-winners", json={"userIds": [bob_id]}, headers=admin)
    assert [w["userName"] for w in client.get("/winners").json()["winners"]] == ["Bob"]


def test_delete_bet(client, admin):
    cry, _ = create_bets(client, admin)
    assert client.delete(f"/admin/bets/{cry}", headers=admin).status_code == 200
    assert client.delete(f"/admin/bets/{cry}", headers=admin).status_code == 404
    assert len(client.get("/admin/bets", headers=admin).json()["bets"]) == 1


def test_startup_loads_config_and_seed_bets(tmp_path, monkeypatch):
    bets_csv = tmp_path / "bets.csv"
    bets_csv.write_text(
        "question,kind,options\nWho will cry first?,multiple-choice,Bride|Groom\n",
        encoding="utf-8"
    )
    settings = tmp_path / "settings.yaml"
    settings.write_text(f"super_admin_email: boss@example.com\nseed_bets_path: {bets_csv}\n", encoding="utf-8")
    monkeypatch.setenv("WAGERS_CONFIG", str(settings))

    with TestClient(app) as client:
        assert client.get("/").json()["total_bets"] == 1
        assert state.CONFIG.super_admin_email == "boss@example.com"


def test_configured_super_admin_can_grant_after_startup(tmp_path, monkeypatch):
    """The e-mail in settings.yaml is known before anyone signs up"""
    settings = tmp_path / "settings.yaml"
    settings.write_text("super_admin_email: Boss@Example.com\nseed_bets_path: null\n", encoding="utf-8")
    monkeypatch.setenv("WAGERS_CONFIG", str(settings))

    with TestClient(app) as client:
        sign_up(client, "boss@example.com", "Boss")
        headers = sign_in(client, "boss@example.com")
        assert client.get("/admin/bets", headers=headers).status_code == 403

        res = client.post("/roles/grant-admin", json={"email": "boss@example.com"}, headers=headers)
        assert res.status_code == 200
        assert res.json()["message"] == "Success! boss@example.com has been made an admin."

        headers = sign_in(client, "boss@example.com")
        assert client.get("/admin/bets", headers=headers).status_code == 200


def test_revoked_admin_session_ends(client, admin):
    """A revoked admin's open session stops working"""
    sign_up(client, "a@example.com", "Alice")
    guest = sign_in(client, "a@example.com")
    assert client.post("/roles/grant-admin", json={"email": "a@example.com"}, headers=admin).status_code == 200
    assert client.get("/auth/me", headers=guest).status_code == 401

    alice = sign_in(client, "a@example.com")
    assert client.get("/admin/bets", headers=alice).status_code == 200

    assert client.post("/roles/revoke-admin", json={"email": "a@example.com"}, headers=admin).status_code == 200
    assert client.get("/admin/bets", headers=alice).status_code == 401

    alice = sign_in(client, "a@example.com")
    assert client.get("/admin/bets", headers=alice).status_code == 403


def test_password_handlers_run_in_threadpool():
    """Argon2 work must not run on the event loop"""
    assert not inspect.iscoroutinefunction(auth.sign_up)
    assert not inspect.iscoroutinefunction(auth.sign_in)

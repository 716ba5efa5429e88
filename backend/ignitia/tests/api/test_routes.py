import json
import uuid
from datetime import timedelta
from unittest.mock import patch

from ignitia.core import security
from ignitia.core.config import settings

API = settings.API_V1_STR

STARTUP = {
    "startupName": "FitSlot",
    "tagline": "Book a class in seconds",
    "description": "Class booking for boutique gyms.",
    "targetAudience": "Busy gym-goers",
    "keyFeatures": ["Live schedules", "Waitlists"],
    "colorScheme": {"primary": "#3b82f6", "secondary": "#1f2937", "accent": "#ef4444"},
    "landingPageHtml": "<!DOCTYPE html><html><body>FitSlot</body></html>",
}


def _save(client, headers, idea="A fitness-class booking app", **fields):
    payload = {"ideaInput": idea, **STARTUP, **fields}
    response = client.post(f"{API}/generations", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_health_check(client):
    response = client.get(f"{API}/utils/health-check/")

    assert response.status_code == 200
    assert response.json() is True


def test_generate_returns_normalized_startup(client, openai_stub, envelope):
    mock_client_instance, _ = openai_stub(envelope("```json\n" + json.dumps(STARTUP) + "\n```"))

    with patch("ignitia.agent.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        with patch("ignitia.agent.llm_client.settings.LLM_API_KEY", "dummy_key"):
            response = client.post(f"{API}/generate", json={"idea": "A fitness-class booking app"})

    assert response.status_code == 200
    assert response.json() == STARTUP


def test_generate_rejects_invalid_idea(client):
    for body in ({}, {"idea": ""}, {"idea": "  "}, {"idea": 7}):
        response = client.post(f"{API}/generate", json=body)

        assert response.status_code == 400, body
        assert "error" in response.json()


def test_generate_reports_malformed_reply(client, openai_stub, envelope):
    mock_client_instance, _ = openai_stub(envelope("no json here"))

    with patch("ignitia.agent.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        with patch("ignitia.agent.llm_client.settings.LLM_API_KEY", "dummy_key"):
            response = client.post(f"{API}/generate", json={"idea": "Anything"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to generate startup details"
    assert "Failed to parse AI response" in body["details"]


def test_generate_rejects_non_standard_json_constants(client, openai_stub, envelope):
    mock_client_instance, _ = openai_stub(envelope('{"startupName": "X", "score": NaN}'))

    with patch("ignitia.agent.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        with patch("ignitia.agent.llm_client.settings.LLM_API_KEY", "dummy_key"):
            response = client.post(f"{API}/generate", json={"idea": "Anything"})

    assert response.status_code == 500
    assert "Failed to parse AI response" in response.json()["details"]


def test_generate_reports_empty_content(client, openai_stub, envelope):
    mock_client_instance, _ = openai_stub(envelope("   "))

    with patch("ignitia.agent.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        with patch("ignitia.agent.llm_client.settings.LLM_API_KEY", "dummy_key"):
            response = client.post(f"{API}/generate", json={"idea": "Anything"})

    assert response.status_code == 500
    assert "empty content" in response.json()["details"]


def test_generations_require_authentication(client):
    assert client.get(f"{API}/generations").status_code == 401
    assert client.post(f"{API}/generations", json={"ideaInput": "x"}).status_code == 401
    assert client.delete(f"{API}/generations/{uuid.uuid4()}").status_code == 401
    response = client.post(f"{API}/export/pdf", json={"generationId": str(uuid.uuid4())})
    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"


def test_invalid_token_is_unauthorized(client):
    response = client.get(f"{API}/generations", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


def test_save_returns_camel_case_record(client, make_user, auth_headers):
    user = make_user("founder@example.com")

    record = _save(client, auth_headers(user))

    assert record["ideaInput"] == "A fitness-class booking app"
    assert record["ownerId"] == str(user.id)
    assert record["colorScheme"]["primary"] == "#3b82f6"
    assert record["id"] and record["createdAt"]


def test_save_requires_idea_input(client, make_user, auth_headers):
    headers = auth_headers(make_user("founder@example.com"))

    response = client.post(f"{API}/generations", json=STARTUP, headers=headers)

    assert response.status_code == 400


def test_save_keeps_model_shaped_features_and_colors(client, make_user, auth_headers):
    headers = auth_headers(make_user("founder@example.com"))
    features = [{"title": "Fast", "description": "Book in seconds"}, "Waitlists"]
    colors = {**STARTUP["colorScheme"], "gradient": ["#fff", "#000"]}

    saved = _save(client, headers, keyFeatures=features, colorScheme=colors)

    assert saved["keyFeatures"] == features
    assert saved["colorScheme"] == colors
    listed = client.get(f"{API}/generations", headers=headers).json()
    assert listed[0]["keyFeatures"] == features

    pitch = client.post(f"{API}/export/pdf", json={"generationId": saved["id"]}, headers=headers)
    assert pitch.status_code == 200
    assert "<li>Fast - Book in seconds</li>" in pitch.text


def test_generate_save_list_delete_flow(client, make_user, auth_headers, openai_stub, envelope):
    headers = auth_headers(make_user("founder@example.com"))
    idea = "A fitness-class booking app"
    mock_client_instance, _ = openai_stub(envelope(json.dumps(STARTUP)))

    with patch("ignitia.agent.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        with patch("ignitia.agent.llm_client.settings.LLM_API_KEY", "dummy_key"):
            generated = client.post(f"{API}/generate", json={"idea": idea}).json()

    saved = client.post(
        f"{API}/generations", json={"ideaInput": idea, **generated}, headers=headers
    ).json()

    listed = client.get(f"{API}/generations", headers=headers).json()
    assert len(listed) == 1
    assert listed[0]["ideaInput"] == idea

    response = client.delete(f"{API}/generations/{saved['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert client.get(f"{API}/generations", headers=headers).json() == []


def test_users_only_see_and_delete_their_own(client, make_user, auth_headers):
    alice = auth_headers(make_user("alice@example.com"))
    bob = auth_headers(make_user("bob@example.com"))
    bobs = _save(client, bob, idea="Bob's idea")

    assert client.get(f"{API}/generations", headers=alice).json() == []
    assert client.delete(f"{API}/generations/{bobs['id']}", headers=alice).status_code == 404
    assert len(client.get(f"{API}/generations", headers=bob).json()) == 1


def test_pitch_export(client, make_user, auth_headers):
    headers = auth_headers(make_user("founder@example.com"))
    saved = _save(client, headers, startupName="Fit Slot", tagline=None, description=None)

    response = client.post(f"{API}/export/pdf", json={"generationId": saved["id"]}, headers=headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert response.headers["content-disposition"] == 'inline; filename="Fit-Slot-pitch.html"'
    assert "border-bottom:3px solid #3b82f6" in response.text
    assert "None" not in response.text


def test_pitch_export_errors(client, make_user, auth_headers):
    alice = auth_headers(make_user("alice@example.com"))
    bob = auth_headers(make_user("bob@example.com"))
    bobs = _save(client, bob)

    missing_id = client.post(f"{API}/export/pdf", json={}, headers=alice)
    assert missing_id.status_code == 400
    assert missing_id.json()["error"] == "generationId required"

    not_owned = client.post(f"{API}/export/pdf", json={"generationId": bobs["id"]}, headers=alice)
    assert not_owned.status_code == 404

    unknown = client.post(f"{API}/export/pdf", json={"generationId": str(uuid.uuid4())}, headers=alice)
    assert unknown.status_code == 404
    assert not_owned.json() == unknown.json()


def test_landing_page_export_is_verbatim(client, make_user, auth_headers):
    headers = auth_headers(make_user("founder@example.com"))
    saved = _save(client, headers)

    response = client.get(f"{API}/export/html/{saved['id']}", headers=headers)

    assert response.status_code == 200
    assert response.text == STARTUP["landingPageHtml"]
    assert response.headers["content-disposition"] == (
        'attachment; filename="FitSlot-landing-page.html"'
    )


def test_signup_login_me_logout(client):
    credentials = {"email": "new@example.com", "password": "long-enough-pw"}

    signup = client.post(f"{API}/auth/signup", json=credentials)
    assert signup.status_code == 200
    assert settings.SESSION_COOKIE_NAME in signup.cookies

    duplicate = client.post(f"{API}/auth/signup", json=credentials)
    assert duplicate.status_code == 400

    client.cookies.clear()
    bad = client.post(
        f"{API}/auth/login", data={"username": credentials["email"], "password": "wrong-password"}
    )
    assert bad.status_code == 401

    login = client.post(
        f"{API}/auth/login",
        data={"username": credentials["email"], "password": credentials["password"]},
    )
    assert login.status_code == 200
    assert login.json()["token_type"] == "bearer"

    # Session cookie alone authenticates.
    me = client.get(f"{API}/auth/me")
    assert me.status_code == 200
    assert me.json()["email"] == credentials["email"]

    client.post(f"{API}/auth/logout")
    assert client.get(f"{API}/auth/me").status_code == 401


def test_near_expiry_session_is_refreshed(client, make_user):
    user = make_user("founder@example.com")
    stale = security.create_access_token(user.id, expires_delta=timedelta(minutes=5))
    fresh = security.create_access_token(user.id)

    refreshed = client.get(f"{API}/generations", headers={"Authorization": f"Bearer {stale}"})
    assert refreshed.status_code == 200
    assert settings.SESSION_COOKIE_NAME in refreshed.headers.get("set-cookie", "")

    client.cookies.clear()
    untouched = client.get(f"{API}/generations", headers={"Authorization": f"Bearer {fresh}"})
    assert untouched.status_code == 200
    assert "set-cookie" not in untouched.headers

from iain.routes import functions as functions_route


def test_requires_authentication(client):
    resp = client.post("/functions/send-welcome-email", json={"email": "a@example.com"})
    assert resp.status_code == 401


def test_requires_email(client, applicant_headers):
    resp = client.post("/functions/send-welcome-email", json={}, headers=applicant_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "The email field is required in the request data."


def test_sends_welcome_email(client, auth_headers, monkeypatch):
    sent = []

    async def fake_send(email):
        sent.append(email)
        return True

    monkeypatch.setattr(functions_route, "send_welcome_email", fake_send)

    resp = client.post("/functions/send-welcome-email", json={"email": "new@example.com"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Welcome email sent successfully."}
    assert sent == ["new@example.com"]


def test_relay_failure(client, auth_headers, monkeypatch):
    async def failing_send(email):
        return False

    monkeypatch.setattr(functions_route, "send_welcome_email", failing_send)

    resp = client.post("/functions/send-welcome-email", json={"email": "new@example.com"}, headers=auth_headers)
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to send welcome email due to server error."

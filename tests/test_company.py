import io

from iain import config
from iain.database import COMPANY_SETTINGS
from iain.routes import company as company_route
from iain.utils.uploads import ImageUploadError

FORM = {
    "company_name": "Enzalada Foods",
    "email": "hr@enzalada.example.com",
    "phone": "0917",
    "industry": "Food",
    "registration_date": "2020-05-01",
    "city": "Cebu",
}


def test_defaults_before_first_save(client, auth_headers):
    body = client.get("/company-profile", headers=auth_headers).json()
    assert body["exists"] is False
    assert body["company_name"] == ""
    assert body["logo_url"] == config.DEFAULT_LOGO_URL


def test_first_save_creates_then_updates(client, auth_headers, fetch):
    first = client.put("/company-profile", data=FORM, headers=auth_headers)
    assert first.status_code == 200
    assert first.json()["created"] is True
    assert first.json()["message"] == "Profile created successfully!"

    second = client.put("/company-profile", data={**FORM, "industry": "Retail"}, headers=auth_headers)
    assert second.json()["created"] is False
    assert second.json()["message"] == "Profile updated successfully!"

    docs = fetch(COMPANY_SETTINGS)
    assert len(docs) == 1
    assert docs[0]["_id"] == config.COMPANY_PROFILE_ID
    assert docs[0]["industry"] == "Retail"
    assert docs[0]["address"]["city"] == "Cebu"

    body = client.get("/company-profile", headers=auth_headers).json()
    assert body["exists"] is True
    assert body["company_name"] == "Enzalada Foods"


def test_company_name_required(client, auth_headers, fetch):
    resp = client.put("/company-profile", data={**FORM, "company_name": "  "}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Company Name is required to save the profile."
    assert fetch(COMPANY_SETTINGS) == []


def test_logo_upload_then_kept_on_later_saves(client, auth_headers, monkeypatch):
    async def fake_upload(file, preset):
        assert preset == "companyimage"
        return "https://cdn.example.com/logo.png"

    monkeypatch.setattr(company_route, "upload_image", fake_upload)

    resp = client.put(
        "/company-profile",
        data=FORM,
        files={"logo": ("logo.png", io.BytesIO(b"\x89PNG"), "image/png")},
        headers=auth_headers,
    )
    assert resp.json()["profile"]["logo_url"] == "https://cdn.example.com/logo.png"

    again = client.put("/company-profile", data=FORM, headers=auth_headers)
    assert again.json()["profile"]["logo_url"] == "https://cdn.example.com/logo.png"


def test_failed_logo_upload_aborts_write(client, auth_headers, fetch, monkeypatch):
    async def failing_upload(file, preset):
        raise ImageUploadError("Upload preset not found")

    monkeypatch.setattr(company_route, "upload_image", failing_upload)

    resp = client.put(
        "/company-profile",
        data=FORM,
        files={"logo": ("logo.png", io.BytesIO(b"x"), "image/png")},
        headers=auth_headers,
    )
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Image upload failed: Upload preset not found"
    assert fetch(COMPANY_SETTINGS) == []


def test_read_database_error(client, auth_headers, db_failure):
    db_failure(COMPANY_SETTINGS, "find_one")

    resp = client.get("/company-profile", headers=auth_headers)
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to load company data. Check console for details."

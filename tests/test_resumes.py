from datetime import datetime

from iain.database import ACCOUNTS, RESUMES


def seed_resumes(seed):
    seed(
        ACCOUNTS,
        {"_id": "u1", "first_name": "Ana", "last_name": "Cruz", "email": "ana@example.com"},
        {"_id": "u2", "first_name": "Ben", "email": "ben@example.com"},
    )
    seed(
        RESUMES,
        {"uid": "u1", "file_name": "cv.pdf", "file_size": "120 KB", "file_url": "https://f/1", "upload_date": datetime(2025, 4, 2)},
        {"uid": "u2", "file_name": "ben.pdf", "file_size": 2048, "file_url": "https://f/2", "upload_date": datetime(2025, 4, 1)},
        {"uid": "u1", "file_name": "cv-v2.pdf", "file_size": "130 KB", "file_url": "https://f/3", "upload_date": datetime(2025, 4, 3)},
        {"uid": "u9", "file_name": "who.pdf", "file_url": "https://f/4"},
    )


def test_resumes_grouped_by_owner(client, auth_headers, seed):
    seed_resumes(seed)

    groups = {g["uid"]: g for g in client.get("/resumes", headers=auth_headers).json()}
    assert set(groups) == {"u1", "u2", "u9"}

    assert groups["u1"]["applicant_name"] == "Ana Cruz"
    assert [r["file_name"] for r in groups["u1"]["resumes"]] == ["cv-v2.pdf", "cv.pdf"]
    assert groups["u1"]["resumes"][0]["upload_date"] == "4/3/2025"

    # No last name falls back to email, unknown owner to the uid
    assert groups["u2"]["applicant_name"] == "ben@example.com"
    assert groups["u9"]["applicant_name"] == "u9"
    assert groups["u9"]["resumes"][0]["upload_date"] == "N/A"


def test_single_owner(client, auth_headers, seed):
    seed_resumes(seed)

    group = client.get("/resumes/u2", headers=auth_headers).json()
    assert group["uid"] == "u2"
    assert group["resumes"][0]["file_size"] == 2048

    assert client.get("/resumes/nobody", headers=auth_headers).status_code == 404

# ========================================
# iain/routes/resumes.py
# ========================================

from datetime import datetime
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException

from iain.database import ACCOUNTS, RESUMES, get_db
from iain.schemas.resume import ResumeGroup
from iain.utils.auth import staff_required
from iain.utils.display import format_numeric_date

router = APIRouter(prefix="/resumes", tags=["Resumes"])


def to_resume_metadata(doc: dict) -> dict:
    upload_date = doc.get("upload_date")
    return {
        "id": str(doc["_id"]),
        "uid": doc.get("uid") or "",
        "file_name": doc.get("file_name"),
        "file_size": doc.get("file_size"),
        "file_url": doc.get("file_url"),
        "storage_path": doc.get("storage_path"),
        "upload_date": format_numeric_date(upload_date) if isinstance(upload_date, datetime) else "N/A",
    }


def display_name(account: dict, uid: str) -> str:
    if account.get("first_name") and account.get("last_name"):
        return f"{account['first_name']} {account['last_name']}"
    return account.get("email") or uid


async def applicant_names(db, uids) -> Dict[str, str]:
    accounts = await db[ACCOUNTS].find({"_id": {"$in": list(uids)}}).to_list(len(uids) or 1)
    return {str(a["_id"]): display_name(a, str(a["_id"])) for a in accounts}


async def grouped_resumes(db, query: dict) -> List[dict]:
    """Group résumé metadata by owning uid, in order of first appearance."""
    docs = await db[RESUMES].find(query).sort("upload_date", -1).to_list(5000)

    groups: Dict[str, list] = {}
    for doc in docs:
        resume = to_resume_metadata(doc)
        groups.setdefault(resume["uid"], []).append(resume)

    names = await applicant_names(db, groups.keys())

    return [
        {"uid": uid, "applicant_name": names.get(uid, uid), "resumes": resumes}
        for uid, resumes in groups.items()
    ]


# ✅ 1. ALL RÉSUMÉS GROUPED BY APPLICANT
@router.get("", response_model=List[ResumeGroup])
async def list_resumes(current_user: dict = Depends(staff_required)):
    db = get_db()
    return await grouped_resumes(db, {})


# ✅ 2. ONE APPLICANT'S RÉSUMÉS
@router.get("/{uid}", response_model=ResumeGroup)
async def get_applicant_resumes(uid: str, current_user: dict = Depends(staff_required)):
    db = get_db()

    groups = await grouped_resumes(db, {"uid": uid})
    if not groups:
        raise HTTPException(status_code=404, detail="No résumés found for this applicant")

    return groups[0]

# ========================================
# iain/routes/accounts.py
# ========================================

import logging
import re
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, HTTPException, Query, Response, UploadFile
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from iain import config
from iain.database import ACCOUNTS, USERS, get_db
from iain.schemas.account import (
    AccountCreate,
    AccountCreatedResponse,
    AccountResponse,
    Address,
    PendingApplicant,
    StatusUpdate,
    StatusUpdateResponse,
)
from iain.utils.auth import APPLICANT_ROLE, create_credential, staff_required
from iain.utils.display import STATUS_PENDING, badge_color, full_name
from iain.utils.email import send_welcome_email
from iain.utils.export import export_accounts_to_csv, generate_filename
from iain.utils.security import AuthError
from iain.utils.uploads import ImageUploadError, upload_image

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts", tags=["Accounts"])

REQUIRED_FIELDS_MESSAGE = "Email, Password, and First Name are required."


def to_account_response(doc: dict) -> dict:
    """Shape a profile document into an applicant table row."""
    status = doc.get("status") or STATUS_PENDING
    return {
        "uid": str(doc.get("uid") or doc["_id"]),
        "email": doc.get("email"),
        "first_name": doc.get("first_name"),
        "last_name": doc.get("last_name"),
        "name": full_name(doc.get("first_name"), doc.get("last_name")),
        "phone": doc.get("phone"),
        "birth_date": doc.get("birth_date"),
        "gender": doc.get("gender"),
        "profile_image_url": doc.get("profile_image_url"),
        "status": status,
        "badge_color": badge_color(status),
        "address": doc.get("address") or {},
        "created_at": doc.get("created_at"),
        "last_updated": doc.get("last_updated"),
    }


def blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


# ===========================
# ACCOUNT CREATION
# ===========================

# ✅ 1. CREATE APPLICANT ACCOUNT
@router.post("", response_model=AccountCreatedResponse, status_code=201)
async def create_account(
    background_tasks: BackgroundTasks,
    email: str = Form(""),
    password: str = Form(""),
    first_name: str = Form(""),
    last_name: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    birth_date: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    street: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    zip: Optional[str] = Form(None),
    country: Optional[str] = Form(None),
    profile_image: Optional[UploadFile] = File(None),
    current_user: dict = Depends(staff_required)
):
    """
    Create an applicant login and its profile document.

    The image (if any) is uploaded first, then the credential is created,
    then the profile is written with status Pending.
    """
    if not email.strip() or not password or not first_name.strip():
        raise HTTPException(status_code=400, detail=REQUIRED_FIELDS_MESSAGE)

    try:
        account = AccountCreate(
            email=email.strip(),
            password=password,
            first_name=first_name.strip(),
            last_name=blank_to_none(last_name),
            phone=blank_to_none(phone),
            birth_date=blank_to_none(birth_date),
            gender=blank_to_none(gender),
            address=Address(
                street=blank_to_none(street),
                city=blank_to_none(city),
                zip=blank_to_none(zip),
                country=blank_to_none(country),
            ),
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()]
        )

    db = get_db()

    # Step 1: image upload aborts everything on failure
    profile_image_url = None
    if profile_image is not None and profile_image.filename:
        try:
            profile_image_url = await upload_image(profile_image, config.CLOUDINARY_PROFILE_PRESET)
        except ImageUploadError as e:
            raise HTTPException(status_code=502, detail=f"Image upload error: {e.message}")

    # Step 2: credential
    try:
        uid = await create_credential(db, account.email, account.password, APPLICANT_ROLE)
    except AuthError as e:
        LOG.warning("Account creation rejected for %s: %s", account.email, e.code)
        raise HTTPException(status_code=400, detail=e.message)
    except PyMongoError:
        LOG.exception("Account creation error for %s", account.email)
        raise HTTPException(status_code=500, detail="Failed to create account.")

    # Step 3: profile document keyed by the credential uid
    profile = {
        "_id": uid,
        "uid": uid,
        "email": account.email.lower(),
        "first_name": account.first_name,
        "last_name": account.last_name,
        "phone": account.phone,
        "birth_date": account.birth_date,
        "gender": account.gender,
        "profile_image_url": profile_image_url,
        "status": STATUS_PENDING,
        "address": account.address.dict(),
        "created_at": datetime.utcnow(),
    }

    try:
        await db[ACCOUNTS].insert_one(profile)
    except PyMongoError:
        LOG.exception("Profile write failed for %s, removing credential", uid)
        await db[USERS].delete_one({"email": account.email.lower()})
        raise HTTPException(status_code=500, detail="Failed to create account.")

    background_tasks.add_task(send_welcome_email, profile["email"])
    LOG.info("Applicant account %s created by %s", uid, current_user["email"])

    return {"message": "New account created successfully!", "account": to_account_response(profile)}


# ===========================
# APPLICANT TABLE
# ===========================

# ✅ 2. LIST APPLICANTS
@router.get("", response_model=List[AccountResponse])
async def list_accounts(
    status: Optional[str] = Query(None, description="Filter by status: Pending, Success, Failed"),
    search: Optional[str] = Query(None, description="Search by name or email"),
    current_user: dict = Depends(staff_required)
):
    """All applicant profile documents."""
    db = get_db()

    query = {}
    if status:
        query["status"] = status
    if search:
        pattern = re.escape(search.strip())
        query["$or"] = [
            {"first_name": {"$regex": pattern, "$options": "i"}},
            {"last_name": {"$regex": pattern, "$options": "i"}},
            {"email": {"$regex": pattern, "$options": "i"}},
        ]

    accounts = await db[ACCOUNTS].find(query).sort("created_at", -1).to_list(1000)
    return [to_account_response(doc) for doc in accounts]


# ✅ 3. PENDING APPLICANTS (notification target picker)
@router.get("/pending", response_model=List[PendingApplicant])
async def list_pending_applicants(current_user: dict = Depends(staff_required)):
    db = get_db()

    applicants = await db[ACCOUNTS].find({"status": STATUS_PENDING}).to_list(1000)
    return [
        {
            "uid": str(doc["_id"]),
            "name": full_name(doc.get("first_name"), doc.get("last_name")),
            "email": doc.get("email") or "N/A",
        }
        for doc in applicants
    ]


# ✅ 4. EXPORT TO CSV
@router.get("/export")
async def export_accounts(
    status: Optional[str] = Query(None),
    current_user: dict = Depends(staff_required)
):
    db = get_db()

    query = {"status": status} if status else {}
    accounts = await db[ACCOUNTS].find(query).sort("created_at", -1).to_list(10000)

    return Response(
        content=export_accounts_to_csv(accounts),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{generate_filename("applicants")}"'}
    )


# ✅ 5. APPLICANT DETAIL (read-only view)
@router.get("/{uid}", response_model=AccountResponse)
async def get_account(uid: str, current_user: dict = Depends(staff_required)):
    db = get_db()

    account = await db[ACCOUNTS].find_one({"_id": uid})
    if not account:
        raise HTTPException(status_code=404, detail="Applicant not found")

    return to_account_response(account)


# ===========================
# STATUS EDIT
# ===========================

# ✅ 6. UPDATE STATUS
@router.put("/{uid}/status", response_model=StatusUpdateResponse)
async def update_status(
    uid: str,
    update: StatusUpdate,
    current_user: dict = Depends(staff_required)
):
    """
    Single-field status update, last writer wins.

    Returns the patched row so the table can replace its copy in place.
    """
    db = get_db()
    now = datetime.utcnow()

    try:
        result = await db[ACCOUNTS].update_one(
            {"_id": uid},
            {"$set": {"status": update.status, "last_updated": now}}
        )
    except PyMongoError:
        LOG.exception("Status update failed for %s", uid)
        raise HTTPException(status_code=500, detail="Failed to update status. Check console for details.")

    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Applicant not found")

    account = await db[ACCOUNTS].find_one({"_id": uid})
    LOG.info("Applicant %s status set to %s by %s", uid, update.status, current_user["email"])

    return {"message": f"Status updated to {update.status}", "account": to_account_response(account)}

# ========================================
# iain/routes/company.py
# ========================================

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pymongo.errors import PyMongoError

from iain import config
from iain.database import COMPANY_SETTINGS, get_db
from iain.schemas.company import CompanyProfile, CompanyProfileSaved
from iain.utils.auth import staff_required
from iain.utils.uploads import ImageUploadError, upload_image

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/company-profile", tags=["Company Profile"])


def to_company_profile(doc: Optional[dict]) -> dict:
    if not doc:
        return {"logo_url": config.DEFAULT_LOGO_URL, "exists": False}

    return {
        "company_name": doc.get("company_name") or "",
        "email": doc.get("email") or "",
        "phone": doc.get("phone") or "",
        "industry": doc.get("industry") or "",
        "registration_date": doc.get("registration_date") or "",
        "logo_url": doc.get("logo_url") or config.DEFAULT_LOGO_URL,
        "address": doc.get("address") or {},
        "last_updated": doc.get("last_updated"),
        "exists": True,
    }


# ✅ 1. READ PROFILE
@router.get("", response_model=CompanyProfile)
async def get_company_profile(current_user: dict = Depends(staff_required)):
    db = get_db()

    try:
        doc = await db[COMPANY_SETTINGS].find_one({"_id": config.COMPANY_PROFILE_ID})
    except PyMongoError:
        LOG.exception("Error fetching company data")
        raise HTTPException(status_code=500, detail="Failed to load company data. Check console for details.")

    return to_company_profile(doc)


# ✅ 2. SAVE PROFILE (create on first use, update afterwards)
@router.put("", response_model=CompanyProfileSaved)
async def save_company_profile(
    company_name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    industry: str = Form(""),
    registration_date: str = Form(""),
    street: str = Form(""),
    city: str = Form(""),
    zip: str = Form(""),
    country: str = Form(""),
    logo: Optional[UploadFile] = File(None),
    current_user: dict = Depends(staff_required)
):
    """
    Upsert the single company settings document.

    A new logo is uploaded before anything is written; a failed upload
    leaves the stored profile untouched.
    """
    if not company_name.strip():
        raise HTTPException(status_code=400, detail="Company Name is required to save the profile.")

    db = get_db()
    doc_id = config.COMPANY_PROFILE_ID

    existing = await db[COMPANY_SETTINGS].find_one({"_id": doc_id})
    logo_url = (existing or {}).get("logo_url") or config.DEFAULT_LOGO_URL

    if logo is not None and logo.filename:
        try:
            logo_url = await upload_image(logo, config.CLOUDINARY_COMPANY_PRESET)
        except ImageUploadError as e:
            raise HTTPException(status_code=502, detail=f"Image upload failed: {e.message}")

    data_to_save = {
        "company_name": company_name.strip(),
        "email": email.strip(),
        "phone": phone.strip(),
        "industry": industry.strip(),
        "registration_date": registration_date.strip(),
        "logo_url": logo_url,
        "address": {
            "street": street.strip(),
            "city": city.strip(),
            "zip": zip.strip(),
            "country": country.strip(),
        },
        "last_updated": datetime.utcnow(),
    }

    try:
        if existing:
            await db[COMPANY_SETTINGS].update_one({"_id": doc_id}, {"$set": data_to_save})
            message = "Profile updated successfully!"
        else:
            await db[COMPANY_SETTINGS].insert_one({"_id": doc_id, **data_to_save})
            message = "Profile created successfully!"
    except PyMongoError:
        LOG.exception("Error saving company data")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to save profile. Check write permissions on '{COMPANY_SETTINGS}'."
        )

    LOG.info("Company profile %s by %s", "updated" if existing else "created", current_user["email"])

    return {
        "message": message,
        "created": not existing,
        "profile": to_company_profile({"_id": doc_id, **data_to_save}),
    }

# ========================================
# iain/schemas/account.py
# ========================================

from pydantic import BaseModel, EmailStr
from typing import Optional, Literal
from datetime import datetime

Gender = Literal["Male", "Female", "Other", "Prefer not to say"]
ApplicantStatus = Literal["Pending", "Success", "Failed"]


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


# 1. Input: Applicant account creation (built from the multipart form)
class AccountCreate(BaseModel):
    email: EmailStr
    password: str
    first_name: str
    last_name: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[str] = None
    gender: Optional[Gender] = None
    address: Address = Address()


# 2. Input: Inline status edit
class StatusUpdate(BaseModel):
    status: ApplicantStatus


# 3. Output: Applicant table row / detail view
class AccountResponse(BaseModel):
    uid: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: str
    phone: Optional[str] = None
    birth_date: Optional[str] = None
    gender: Optional[str] = None
    profile_image_url: Optional[str] = None
    status: str
    badge_color: str
    address: Address = Address()
    created_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    class Config:
        from_attributes = True


class AccountCreatedResponse(BaseModel):
    message: str
    account: AccountResponse


# 4. Output: Target picker for notification authoring
class PendingApplicant(BaseModel):
    uid: str
    name: str
    email: str


class StatusUpdateResponse(BaseModel):
    message: str
    account: AccountResponse

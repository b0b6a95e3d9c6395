from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from iain.schemas.account import Address


class CompanyProfile(BaseModel):
    """The single organization-wide settings document"""
    company_name: str = ""
    email: str = ""
    phone: str = ""
    industry: str = ""
    registration_date: str = ""
    logo_url: str
    address: Address = Address()
    last_updated: Optional[datetime] = None
    exists: bool = False


class CompanyProfileSaved(BaseModel):
    message: str
    created: bool
    profile: CompanyProfile

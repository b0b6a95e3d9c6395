from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime

# 1. Staff sign-up (Input)
class StaffCreate(BaseModel):
    name: Optional[str] = None
    email: EmailStr
    password: str

# 2. Sign-in (Input)
class StaffLogin(BaseModel):
    email: str
    password: str

# 3. Responses (Output)
class StaffResponse(BaseModel):
    id: str
    name: Optional[str] = None
    email: EmailStr
    role: str
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True

class TokenResponse(BaseModel):
    access_token: str
    token_type: str

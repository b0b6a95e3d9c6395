# ========================================
# iain/routes/auth.py
# ========================================

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from iain import config
from iain.database import USERS, get_db
from iain.schemas.user import StaffCreate, StaffLogin, StaffResponse, TokenResponse
from iain.utils.auth import STAFF_ROLE, create_access_token, create_credential, staff_required
from iain.utils.security import AuthError, verify_password

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def to_staff_response(user: dict) -> dict:
    return {
        "id": str(user["_id"]),
        "name": user.get("name"),
        "email": user["email"],
        "role": user.get("role", STAFF_ROLE),
        "created_at": user.get("created_at"),
        "last_login": user.get("last_login"),
    }


# ✅ 1. SIGN UP (staff)
@router.post("/signup", response_model=StaffResponse)
async def signup(staff: StaffCreate):
    """Create a dashboard staff account."""
    db = get_db()

    if not config.ALLOW_STAFF_SIGNUP and await db[USERS].find_one({"role": STAFF_ROLE}):
        raise HTTPException(status_code=403, detail="Sign-up is disabled. Ask an administrator for access.")

    try:
        uid = await create_credential(db, staff.email, staff.password, STAFF_ROLE, name=staff.name)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=e.message)

    user = await db[USERS].find_one({"email": staff.email.lower()})
    LOG.info("Staff account %s created", uid)
    return to_staff_response(user)


# ✅ 2. SIGN IN
@router.post("/signin", response_model=TokenResponse)
async def signin(credentials: StaffLogin):
    """Sign in and get a JWT access token."""
    db = get_db()

    email = credentials.email.lower()
    user = await db[USERS].find_one({"email": email})
    if not user or not verify_password(credentials.password, user["password"]):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    await db[USERS].update_one({"_id": user["_id"]}, {"$set": {"last_login": datetime.utcnow()}})

    access_token = create_access_token(data={"sub": email, "role": user.get("role")})
    return {"access_token": access_token, "token_type": "bearer"}


# ✅ 3. WHO AM I
@router.get("/me", response_model=StaffResponse)
async def get_me(current_user: dict = Depends(staff_required)):
    """Current sign-in state."""
    return to_staff_response(current_user)

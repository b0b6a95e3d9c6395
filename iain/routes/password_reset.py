import logging
import secrets
from datetime import datetime, timedelta

from fastapi import APIRouter, HTTPException

from iain.database import PASSWORD_RESETS, USERS, get_db
from iain.schemas.password_reset import (
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    ResetPasswordRequest,
    VerifyOTPRequest,
    VerifyOTPResponse,
)
from iain.utils.email import send_otp_email
from iain.utils.security import get_password_hash

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Password Reset"])

OTP_TTL_MINUTES = 10
MAX_OTP_ATTEMPTS = 5


def generate_otp():
    """Generate a 6-digit OTP"""
    return str(secrets.randbelow(1000000)).zfill(6)


async def find_user(db, email: str) -> dict:
    user = await db[USERS].find_one({"email": email.lower()})
    if not user:
        raise HTTPException(status_code=404, detail="No account found with this email address")
    return user


async def deliver_otp(email: str, otp: str, user: dict):
    sent = await send_otp_email(email=email, otp=otp, name=user.get("name") or "User")
    if not sent:
        LOG.error("OTP email to %s was not delivered", email)
        raise HTTPException(status_code=500, detail="Failed to send email. Please try again later.")


# ✅ 1. REQUEST RESET EMAIL
@router.post("/forgot-password", response_model=ForgotPasswordResponse)
async def forgot_password(request: ForgotPasswordRequest):
    """Send a one-time code to the account's email."""
    db = get_db()
    email = request.email.lower()
    user = await find_user(db, email)

    otp = generate_otp()
    now = datetime.utcnow()

    # Only the newest code stays valid
    await db[PASSWORD_RESETS].delete_many({"email": email})
    await db[PASSWORD_RESETS].insert_one({
        "email": email,
        "otp": otp,
        "created_at": now,
        "expires_at": now + timedelta(minutes=OTP_TTL_MINUTES),
        "verified": False,
        "attempts": 0,
    })

    await deliver_otp(email, otp, user)

    return ForgotPasswordResponse(message="OTP sent successfully to your email", email=email)


# ✅ 2. VERIFY CODE
@router.post("/verify-otp", response_model=VerifyOTPResponse)
async def verify_otp(request: VerifyOTPRequest):
    db = get_db()
    email = request.email.lower()

    record = await db[PASSWORD_RESETS].find_one({"email": email, "verified": False})
    if not record:
        raise HTTPException(status_code=404, detail="No pending OTP found for this email")

    if datetime.utcnow() > record["expires_at"]:
        await db[PASSWORD_RESETS].delete_one({"_id": record["_id"]})
        raise HTTPException(status_code=400, detail="OTP has expired. Please request a new one.")

    if record["attempts"] >= MAX_OTP_ATTEMPTS:
        await db[PASSWORD_RESETS].delete_one({"_id": record["_id"]})
        raise HTTPException(status_code=429, detail="Too many failed attempts. Please request a new OTP.")

    if record["otp"] != request.otp:
        await db[PASSWORD_RESETS].update_one({"_id": record["_id"]}, {"$inc": {"attempts": 1}})
        remaining = MAX_OTP_ATTEMPTS - (record["attempts"] + 1)
        raise HTTPException(status_code=400, detail=f"Invalid OTP. {remaining} attempts remaining.")

    await db[PASSWORD_RESETS].update_one(
        {"_id": record["_id"]},
        {"$set": {"verified": True, "verified_at": datetime.utcnow()}}
    )

    return VerifyOTPResponse(message="OTP verified successfully", verified=True)


# ✅ 3. SET NEW PASSWORD
@router.post("/reset-password")
async def reset_password(request: ResetPasswordRequest):
    db = get_db()
    email = request.email.lower()

    record = await db[PASSWORD_RESETS].find_one({"email": email, "otp": request.otp, "verified": True})
    if not record:
        raise HTTPException(status_code=400, detail="OTP not verified or invalid")

    if datetime.utcnow() > record["expires_at"]:
        await db[PASSWORD_RESETS].delete_one({"_id": record["_id"]})
        raise HTTPException(status_code=400, detail="OTP has expired. Please start the process again.")

    result = await db[USERS].update_one(
        {"email": email},
        {"$set": {"password": get_password_hash(request.new_password), "password_reset_at": datetime.utcnow()}}
    )
    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="User not found")

    await db[PASSWORD_RESETS].delete_one({"_id": record["_id"]})
    LOG.info("Password reset for %s", email)

    return {
        "message": "Password reset successfully. You can now login with your new password.",
        "email": email
    }

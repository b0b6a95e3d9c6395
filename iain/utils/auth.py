import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pymongo.errors import DuplicateKeyError

from iain.config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, SECRET_KEY
from iain.database import USERS, get_db
from iain.utils.security import (
    EMAIL_ALREADY_IN_USE,
    WEAK_PASSWORD,
    AuthError,
    get_password_hash,
    is_weak_password,
)

LOG = logging.getLogger(__name__)

# Missing headers are reported as 401 below instead of HTTPBearer's default
security = HTTPBearer(auto_error=False)

STAFF_ROLE = "admin"
APPLICANT_ROLE = "applicant"


def create_access_token(data: dict, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES):
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


async def create_credential(db, email: str, password: str, role: str, name: Optional[str] = None) -> str:
    """
    Create a login credential and return its uid.

    Raises AuthError with EMAIL_ALREADY_IN_USE or WEAK_PASSWORD.
    """
    if is_weak_password(password):
        raise AuthError(WEAK_PASSWORD)

    email = email.lower()
    if await db[USERS].find_one({"email": email}):
        raise AuthError(EMAIL_ALREADY_IN_USE)

    try:
        result = await db[USERS].insert_one({
            "email": email,
            "password": get_password_hash(password),
            "role": role,
            "name": name,
            "created_at": datetime.utcnow(),
            "last_login": None,
        })
    except DuplicateKeyError:
        # Lost a race with a concurrent creation for the same email
        raise AuthError(EMAIL_ALREADY_IN_USE)
    LOG.info("Created %s credential for %s", role, email)
    return str(result.inserted_id)


async def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    try:
        payload = jwt.decode(credentials.credentials, SECRET_KEY, algorithms=[ALGORITHM])
        email: str = payload.get("sub")
        if email is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    db = get_db()
    user = await db[USERS].find_one({"email": email})
    if user is None:
        raise credentials_exception

    return user


def staff_required(current_user: dict = Depends(get_current_user)):
    """Verify the signed-in user is dashboard staff"""
    if current_user.get("role") != STAFF_ROLE:
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user

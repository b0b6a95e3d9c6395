# ========================================
# iain/config.py
# ========================================

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(dotenv_path=BASE_DIR / ".env")

# ===========================
# DATABASE
# ===========================
MONGO_URI = os.getenv("MONGO_URI")
DATABASE_NAME = os.getenv("DATABASE_NAME", "iain")

# ===========================
# AUTH
# ===========================
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-CHANGE_THIS")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
MIN_PASSWORD_LENGTH = 6
# When false, /auth/signup only bootstraps the first admin
ALLOW_STAFF_SIGNUP = os.getenv("ALLOW_STAFF_SIGNUP", "true").lower() in ("1", "true", "yes")

# ===========================
# HTTP
# ===========================
ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()
]

# ===========================
# IMAGE HOST (Cloudinary unsigned uploads)
# ===========================
CLOUDINARY_UPLOAD_URL = os.getenv(
    "CLOUDINARY_UPLOAD_URL", "https://api.cloudinary.com/v1_1/YOUR_CLOUD_NAME/image/upload"
)
CLOUDINARY_PROFILE_PRESET = os.getenv("CLOUDINARY_PROFILE_PRESET", "applicantprofile")
CLOUDINARY_COMPANY_PRESET = os.getenv("CLOUDINARY_COMPANY_PRESET", "companyimage")
UPLOAD_TIMEOUT_SECONDS = int(os.getenv("UPLOAD_TIMEOUT_SECONDS", "30"))

# ===========================
# COMPANY PROFILE
# ===========================
COMPANY_PROFILE_ID = os.getenv("COMPANY_PROFILE_ID", "enzalada-main")
DEFAULT_LOGO_URL = "/images/admin/default-company-logo.svg"

# ===========================
# MAIL
# ===========================
WEB_APP_URL = os.getenv("WEB_APP_URL", "http://localhost:5173/signin")
MAIL_USERNAME = os.getenv("MAIL_USERNAME", "")
MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
MAIL_FROM_NAME = os.getenv("MAIL_FROM_NAME", "IAIN")
MAIL_PROVIDER = os.getenv("MAIL_PROVIDER", "auto").lower()
SMTP_HOST = os.getenv("SMTP_HOST", "smtp.example.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ========================================
# iain/main.py
# ========================================

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from iain import config
from iain.database import connect_to_mongo, close_mongo_connection

# ===========================
# IMPORT ALL ROUTERS
# ===========================

# Staff auth
from iain.routes.auth import router as auth_router
from iain.routes.password_reset import router as password_reset_router

# Applicants
from iain.routes.accounts import router as accounts_router
from iain.routes.resumes import router as resumes_router

# Scheduling
from iain.routes.notifications import router as notifications_router
from iain.routes.calendar import router as calendar_router

# Overview & settings
from iain.routes.dashboard import router as dashboard_router
from iain.routes.company import router as company_router

# Callable functions
from iain.routes.functions import router as functions_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="[%(levelname)s] %(asctime)s %(name)s: %(message)s",
)

VERSION = "1.0.0"

# Dashboard pages and the endpoints that back them
PAGE_ROUTES = {
    "/": ["GET /dashboard"],
    "/profile": ["GET /company-profile", "PUT /company-profile"],
    "/calendar": ["GET /calendar/events"],
    "/form-elements": ["POST /accounts"],
    "/create-notification": ["GET /accounts/pending", "POST /notifications"],
    "/notifications": ["GET /notifications", "GET /notifications/summary", "PUT /notifications/{id}/read"],
    "/basic-tables": ["GET /accounts", "GET /accounts/{uid}", "PUT /accounts/{uid}/status", "GET /accounts/export"],
    "/resume-lists": ["GET /resumes", "GET /resumes/{uid}"],
    "/signin": ["POST /auth/signin"],
    "/signup": ["POST /auth/signup"],
    "/reset-password": ["POST /auth/forgot-password", "POST /auth/verify-otp", "POST /auth/reset-password"],
}

# ===========================
# CREATE FASTAPI APP
# ===========================

app = FastAPI(
    title="IAIN Admin API",
    description="Applicant tracking admin backend: accounts, status review, notifications, calendar, résumés and company profile",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# ===========================
# CORS MIDDLEWARE
# ===========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================
# DATABASE EVENTS
# ===========================

@app.on_event("startup")
async def start_db():
    """Connect to MongoDB on startup"""
    await connect_to_mongo()

@app.on_event("shutdown")
async def stop_db():
    await close_mongo_connection()

# ===========================
# REGISTER ROUTERS
# ===========================

app.include_router(auth_router)
app.include_router(password_reset_router)

app.include_router(accounts_router)
app.include_router(resumes_router)

app.include_router(notifications_router)
app.include_router(calendar_router)

app.include_router(dashboard_router)
app.include_router(company_router)

app.include_router(functions_router)

# ===========================
# ROOT ENDPOINTS
# ===========================

@app.get("/")
async def root():
    """API root with the page route table"""
    return {
        "status": "IAIN Admin API Running",
        "version": VERSION,
        "documentation": "/docs",
        "pages": PAGE_ROUTES,
        "database": {
            "collections": [
                "users",
                "accounts",
                "notifications",
                "company_settings",
                "user_resumes",
                "password_resets"
            ]
        }
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": VERSION}

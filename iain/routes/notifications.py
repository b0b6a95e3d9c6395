# ========================================
# iain/routes/notifications.py
# ========================================

import logging
from datetime import datetime
from typing import Dict, List, Optional

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo.errors import PyMongoError

from iain.database import ACCOUNTS, NOTIFICATIONS, get_db
from iain.schemas.notification import (
    NotificationCreate,
    NotificationCreatedResponse,
    NotificationItem,
    NotificationSummary,
)
from iain.utils.auth import staff_required
from iain.utils.display import format_scheduled_date, format_time_ago, full_name

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])

MISSING_FIELDS_MESSAGE = "All fields (Title, Description, Date, Type) and one applicant must be selected."
DROPDOWN_SIZE = 5


async def lookup_recipients(db, uids) -> Dict[str, dict]:
    """Fetch the target applicant of each notification, keyed by uid."""
    uids = {uid for uid in uids if uid}
    if not uids:
        return {}

    applicants = await db[ACCOUNTS].find({"_id": {"$in": list(uids)}}).to_list(len(uids))
    return {str(doc["_id"]): doc for doc in applicants}


def recipient_fields(applicant: Optional[dict]) -> dict:
    if not applicant:
        return {"recipient_name": "N/A", "recipient_email": "N/A"}
    return {
        "recipient_name": full_name(applicant.get("first_name"), applicant.get("last_name")),
        "recipient_email": applicant.get("email") or "N/A",
    }


# ===========================
# AUTHORING
# ===========================

# ✅ 1. SCHEDULE NOTIFICATION
@router.post("", response_model=NotificationCreatedResponse, status_code=201)
async def create_notification(
    notification: NotificationCreate,
    current_user: dict = Depends(staff_required)
):
    """Schedule a message (optionally an interview slot) for one applicant."""

    required = (
        notification.title,
        notification.description,
        notification.scheduled_date,
        notification.target_uid,
    )
    if not notification.type or not all(value.strip() for value in required):
        raise HTTPException(status_code=400, detail=MISSING_FIELDS_MESSAGE)

    if notification.time_is_required and not notification.scheduled_time:
        raise HTTPException(
            status_code=400,
            detail=f"The selected notification type ({notification.type}) requires a specific time."
        )

    db = get_db()

    notif_doc = {
        "title": notification.title.strip(),
        "description": notification.description.strip(),
        "scheduled_date": notification.scheduled_date,
        # Only live session types keep their time slot
        "scheduled_time": notification.scheduled_time if notification.time_is_required else None,
        "type": notification.type,
        "status": "scheduled",
        "read": False,
        "target_uid": notification.target_uid.strip(),
        "created_at": datetime.utcnow(),
        "created_by": str(current_user["_id"]),
    }

    try:
        result = await db[NOTIFICATIONS].insert_one(notif_doc)
    except PyMongoError:
        LOG.exception("Failed to create notification for %s", notif_doc["target_uid"])
        raise HTTPException(
            status_code=500,
            detail="Failed to create notification. Check console for details."
        )

    return {
        "message": f"Notification created and scheduled for applicant UID: {notif_doc['target_uid']}",
        "id": str(result.inserted_id)
    }


# ===========================
# INBOX
# ===========================

# ✅ 2. NOTIFICATION INBOX
@router.get("", response_model=List[NotificationItem])
async def list_notifications(
    limit: int = Query(20, ge=1, le=100),
    current_user: dict = Depends(staff_required)
):
    """Newest notifications, each joined with its target applicant."""
    db = get_db()

    notifications = await db[NOTIFICATIONS].find().sort("created_at", -1).limit(limit).to_list(limit)
    recipients = await lookup_recipients(db, [n.get("target_uid") for n in notifications])
    now = datetime.utcnow()

    result = []
    for notif in notifications:
        result.append({
            "id": str(notif["_id"]),
            "name": notif.get("title") or "New Notification",
            "title": notif.get("title") or "No Title",
            "description": notif.get("description") or "No description provided.",
            "category": "Notification",
            "type": notif.get("type") or "General",
            "time": format_time_ago(notif.get("created_at"), now=now),
            "read": bool(notif.get("read", False)),
            "scheduled_date": format_scheduled_date(notif.get("scheduled_date")),
            "scheduled_time": notif.get("scheduled_time"),
            **recipient_fields(recipients.get(notif.get("target_uid"))),
        })

    return result


# ✅ 3. HEADER DROPDOWN SUMMARY
@router.get("/summary", response_model=NotificationSummary)
async def notification_summary(current_user: dict = Depends(staff_required)):
    db = get_db()

    latest = await db[NOTIFICATIONS].find().sort("created_at", -1).limit(DROPDOWN_SIZE).to_list(DROPDOWN_SIZE)
    unread_count = await db[NOTIFICATIONS].count_documents({"read": {"$ne": True}})
    now = datetime.utcnow()

    previews = [
        {
            "id": str(notif["_id"]),
            "title": notif.get("title") or "New Message",
            "description": str(notif.get("description") or "View details."),
            "category": notif.get("type") or "General",
            "time": format_time_ago(notif.get("created_at"), now=now, short=True),
            "read": bool(notif.get("read", False)),
        }
        for notif in latest
    ]

    return {
        "notifying": any(not p["read"] for p in previews),
        "unread_count": unread_count,
        "notifications": previews,
    }


# ✅ 4. MARK AS READ
@router.put("/{notification_id}/read")
async def mark_as_read(
    notification_id: str,
    current_user: dict = Depends(staff_required)
):
    """Flip the read flag of exactly one notification."""

    if not ObjectId.is_valid(notification_id):
        raise HTTPException(status_code=400, detail="Invalid notification ID")

    db = get_db()

    try:
        result = await db[NOTIFICATIONS].update_one(
            {"_id": ObjectId(notification_id)},
            {"$set": {"read": True}}
        )
    except PyMongoError:
        LOG.exception("Error marking notification %s as read", notification_id)
        raise HTTPException(status_code=500, detail="Could not update status in the database.")

    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Notification not found")

    return {"message": "Notification marked as read", "id": notification_id, "read": True}

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from iain.database import NOTIFICATIONS, get_db
from iain.routes.notifications import lookup_recipients
from iain.schemas.notification import CalendarEvent
from iain.utils.auth import staff_required
from iain.utils.display import event_color, full_name

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["Calendar"])


def to_calendar_event(notif: dict, applicant: Optional[dict]) -> dict:
    event_type = notif.get("type") or "General"
    event_date = notif.get("scheduled_date") or ""
    event_time = notif.get("scheduled_time") or ""

    return {
        "id": str(notif["_id"]),
        "title": notif.get("title") or "Untitled Event",
        # Untimed notifications render as all-day events
        "start": f"{event_date}T{event_time}:00" if event_time else event_date,
        "all_day": not event_time,
        "color": event_color(event_type),
        "extended_props": {
            "calendar": event_type,
            "description": notif.get("description"),
            "scheduled_time": event_time,
            "recipient_name": (
                full_name(applicant.get("first_name"), applicant.get("last_name"))
                if applicant else "Applicant"
            ),
        },
    }


@router.get("/events", response_model=List[CalendarEvent])
async def list_events(
    start: Optional[date] = Query(None, description="First day shown (inclusive)"),
    end: Optional[date] = Query(None, description="Last day shown (inclusive)"),
    current_user: dict = Depends(staff_required)
):
    """Every scheduled notification as a calendar event."""

    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")

    db = get_db()

    # Stored dates are ISO strings, so string ranges compare chronologically
    query = {}
    if start or end:
        query["scheduled_date"] = {}
        if start:
            query["scheduled_date"]["$gte"] = start.isoformat()
        if end:
            query["scheduled_date"]["$lte"] = end.isoformat()

    notifications = await db[NOTIFICATIONS].find(query).sort("scheduled_date", 1).to_list(5000)
    applicants = await lookup_recipients(db, [n.get("target_uid") for n in notifications])

    return [
        to_calendar_event(notif, applicants.get(notif.get("target_uid")))
        for notif in notifications
        if notif.get("scheduled_date")
    ]

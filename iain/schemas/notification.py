# ========================================
# iain/schemas/notification.py
# ========================================

from pydantic import BaseModel, validator
from typing import Dict, List, Optional, Literal
from datetime import date, datetime

NotificationType = Literal["Interview", "Meeting", "Reminder", "General"]

# Types that are held live and therefore need a time slot
TIMED_TYPES = ("Interview", "Meeting")


class NotificationCreate(BaseModel):
    """Schema for scheduling a notification to one applicant"""
    title: str = ""
    description: str = ""
    type: Optional[NotificationType] = None
    target_uid: str = ""
    scheduled_date: str = ""  # YYYY-MM-DD
    scheduled_time: Optional[str] = None  # HH:MM

    @validator('scheduled_date')
    def validate_date(cls, v):
        if v:
            try:
                date.fromisoformat(v)
            except ValueError:
                raise ValueError('Date must be in YYYY-MM-DD format')
        return v

    @validator('scheduled_time')
    def validate_time(cls, v):
        if v:
            try:
                # Stored zero-padded so calendar starts are ISO-8601
                return datetime.strptime(v, "%H:%M").strftime("%H:%M")
            except ValueError:
                raise ValueError('Time must be in HH:MM format')
        return None

    @property
    def time_is_required(self) -> bool:
        return self.type in TIMED_TYPES


class NotificationCreatedResponse(BaseModel):
    message: str
    id: str


# Output: full inbox entry
class NotificationItem(BaseModel):
    id: str
    name: str
    title: str
    description: str
    category: str
    type: str
    time: str
    read: bool
    scheduled_date: str
    scheduled_time: Optional[str] = None
    recipient_name: str
    recipient_email: str


# Output: header dropdown entry
class NotificationPreview(BaseModel):
    id: str
    title: str
    description: str
    category: str
    time: str
    read: bool


class NotificationSummary(BaseModel):
    notifying: bool
    unread_count: int
    notifications: List[NotificationPreview]


class CalendarEvent(BaseModel):
    id: str
    title: str
    start: str
    all_day: bool
    color: str
    extended_props: Dict[str, Optional[str]]

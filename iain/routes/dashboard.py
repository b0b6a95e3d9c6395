# ========================================
# iain/routes/dashboard.py
# ========================================

from datetime import datetime

from fastapi import APIRouter, Depends

from iain.database import ACCOUNTS, get_db
from iain.schemas.dashboard import DashboardMetrics
from iain.utils.auth import staff_required
from iain.utils.display import (
    STATUS_FAILED,
    STATUS_PENDING,
    STATUS_SUCCESS,
    format_short_date,
    full_name,
    percentage,
    success_rate,
)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

RECENT_ACTIVITY_SIZE = 5


def compute_metrics(applicants):
    """Count applicants per status by a single pass over the collection."""
    total = len(applicants)
    pending = len([a for a in applicants if a.get("status") == STATUS_PENDING])
    success = len([a for a in applicants if a.get("status") == STATUS_SUCCESS])
    failed = len([a for a in applicants if a.get("status") == STATUS_FAILED])

    return {
        "total_applicants": total,
        "pending_count": pending,
        "success_count": success,
        "failed_count": failed,
        "success_rate": success_rate(success, total),
        "distribution": {
            "success": percentage(success, total),
            "pending": percentage(pending, total),
            "failed": percentage(failed, total),
        },
    }


def to_activity_row(doc: dict, now: datetime) -> dict:
    timestamp = doc.get("last_updated") or doc.get("created_at")
    if not isinstance(timestamp, datetime):
        timestamp = now

    return {
        "name": full_name(doc.get("first_name"), doc.get("last_name"), default="Unknown"),
        "status": doc.get("status") or STATUS_PENDING,
        "date": format_short_date(timestamp),
    }


# ✅ DASHBOARD OVERVIEW
@router.get("", response_model=DashboardMetrics)
async def get_dashboard(current_user: dict = Depends(staff_required)):
    """Applicant counts, success rate and the latest activity, recomputed per call."""
    db = get_db()

    applicants = await db[ACCOUNTS].find({}, {"status": 1}).to_list(None)
    metrics = compute_metrics(applicants)

    recent = await db[ACCOUNTS].find().sort("created_at", -1).limit(RECENT_ACTIVITY_SIZE).to_list(RECENT_ACTIVITY_SIZE)
    now = datetime.utcnow()
    metrics["recent_activity"] = [to_activity_row(doc, now) for doc in recent]

    return metrics

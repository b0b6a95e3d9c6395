from pydantic import BaseModel
from typing import Dict, List


class RecentActivity(BaseModel):
    name: str
    status: str
    date: str


class DashboardMetrics(BaseModel):
    """Counts recomputed from the whole applicant collection"""
    total_applicants: int
    pending_count: int
    success_count: int
    failed_count: int
    success_rate: str  # "40.0%"
    distribution: Dict[str, float]
    recent_activity: List[RecentActivity]

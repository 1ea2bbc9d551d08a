from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from hrerp.models.auth import User
from hrerp.models.employee import DEFAULT_DISPLAY_NAME
from hrerp.services.employee_store import EmployeeStore
from hrerp.services.record_stores import AttendanceStore, LeaveRequestStore, PerformanceReviewStore


class DashboardMetrics(BaseModel):
    greeting_name: str
    total_employees: int
    attendance_rate: float
    pending_leaves: int
    performance_score: float


def greeting_name(user: User | None) -> str:
    if user is None or not user.name.strip():
        return DEFAULT_DISPLAY_NAME
    return user.name.split()[0]


def build_dashboard(
    user: User | None,
    employees: EmployeeStore,
    attendance: AttendanceStore,
    leave_requests: LeaveRequestStore,
    reviews: PerformanceReviewStore,
    day: date | None = None,
) -> DashboardMetrics:
    """Summarize the already-fetched stores; nothing is requested from the backend."""
    stats = employees.stats()
    return DashboardMetrics(
        greeting_name=greeting_name(user),
        total_employees=stats.total,
        attendance_rate=attendance.attendance_rate(day or date.today(), stats.active),
        pending_leaves=leave_requests.pending_count(),
        performance_score=reviews.average_score(),
    )

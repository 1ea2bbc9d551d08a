"""All stores for one authenticated client, wired to the same backend."""

from __future__ import annotations

from typing import Any

from hrerp.core.config import Settings
from hrerp.core.notifications import Notifier, logging_notifier
from hrerp.models.auth import Principal
from hrerp.services.employee_store import EmployeeStore
from hrerp.services.entity_store import EntityStore
from hrerp.services.record_stores import (
    AttendanceStore,
    CertificationStore,
    CourseEnrollmentStore,
    CourseStore,
    DepartmentStore,
    JobApplicationStore,
    JobPostingStore,
    LeaveRequestStore,
    PayrollStore,
    PerformanceReviewStore,
)
from hrerp.services.session_service import AuthProvider, SessionResolver

# URL segment -> store attribute for the flat entities
RECORD_STORES: dict[str, str] = {
    "departments": "departments",
    "attendance": "attendance",
    "leave-requests": "leave_requests",
    "payroll": "payroll",
    "performance-reviews": "performance_reviews",
    "job-postings": "job_postings",
    "job-applications": "job_applications",
    "courses": "courses",
    "course-enrollments": "course_enrollments",
    "certifications": "certifications",
}


class Workspace:
    def __init__(
        self,
        backend: Any,
        settings: Settings,
        principal: Principal | None = None,
        notifier: Notifier = logging_notifier,
    ) -> None:
        self.backend = backend
        self.auth = AuthProvider(backend, principal)
        self.session = SessionResolver(backend, self.auth)
        self.session.attach()

        self.employees = EmployeeStore(backend, notifier, code_prefix=settings.EMPLOYEE_CODE_PREFIX)
        self.departments = DepartmentStore(backend, notifier)
        self.attendance = AttendanceStore(backend, notifier)
        self.leave_requests = LeaveRequestStore(backend, notifier)
        self.payroll = PayrollStore(backend, notifier)
        self.performance_reviews = PerformanceReviewStore(backend, notifier)
        self.job_postings = JobPostingStore(backend, notifier)
        self.job_applications = JobApplicationStore(backend, notifier)
        self.courses = CourseStore(backend, notifier)
        self.course_enrollments = CourseEnrollmentStore(backend, notifier)
        self.certifications = CertificationStore(backend, notifier)

    def store(self, segment: str) -> EntityStore[Any]:
        return getattr(self, RECORD_STORES[segment])

"""Stores for the flat HR entities whose view-model is the wire row."""

from __future__ import annotations

from datetime import date

from hrerp.models.schema import (
    ApplicationStatus,
    AttendanceRow,
    CertificationRow,
    CourseEnrollmentRow,
    CourseRow,
    DepartmentRow,
    JobApplicationRow,
    JobPostingRow,
    LeaveRequestRow,
    LeaveStatus,
    PayrollRow,
    PerformanceRating,
    PerformanceReviewRow,
)
from hrerp.services.entity_store import EntityStore

RATING_SCORES: dict[PerformanceRating, int] = {
    PerformanceRating.EXCELLENT: 5,
    PerformanceRating.GOOD: 4,
    PerformanceRating.SATISFACTORY: 3,
    PerformanceRating.NEEDS_IMPROVEMENT: 2,
    PerformanceRating.UNSATISFACTORY: 1,
}


class DepartmentStore(EntityStore[DepartmentRow]):
    table = "departments"
    label = "department"
    plural = "departments"


class AttendanceStore(EntityStore[AttendanceRow]):
    table = "attendance"
    label = "attendance record"
    plural = "attendance records"

    def for_day(self, day: date | str) -> list[AttendanceRow]:
        key = day.isoformat() if isinstance(day, date) else day
        return [record for record in self.items if record.date == key]

    def attendance_rate(self, day: date | str, active_employees: int) -> float:
        """Percentage of active employees who clocked in on ``day``."""
        if active_employees <= 0:
            return 0.0
        present = {record.employee_id for record in self.for_day(day) if record.clock_in}
        return round(min(len(present), active_employees) / active_employees * 100, 1)


class LeaveRequestStore(EntityStore[LeaveRequestRow]):
    table = "leave_requests"
    label = "leave request"
    plural = "leave requests"
    insert_defaults = {"status": LeaveStatus.PENDING.value}

    def for_employee(self, employee_id: str) -> list[LeaveRequestRow]:
        return self.filter_by(employee_id=employee_id)

    def pending_count(self) -> int:
        return len(self.filter_by(status=LeaveStatus.PENDING))


class PayrollStore(EntityStore[PayrollRow]):
    table = "payroll"
    label = "payroll record"
    plural = "payroll records"


class PerformanceReviewStore(EntityStore[PerformanceReviewRow]):
    table = "performance_reviews"
    label = "performance review"
    plural = "performance reviews"

    def average_score(self) -> float:
        """Mean rating on a 1–5 scale over rated reviews; 0 when none are rated."""
        scores = [RATING_SCORES[r.overall_rating] for r in self.items if r.overall_rating]
        if not scores:
            return 0.0
        return round(sum(scores) / len(scores), 1)


class JobPostingStore(EntityStore[JobPostingRow]):
    table = "job_postings"
    label = "job posting"
    plural = "job postings"


class JobApplicationStore(EntityStore[JobApplicationRow]):
    table = "job_applications"
    label = "job application"
    plural = "job applications"
    order_column = "applied_at"
    insert_defaults = {"status": ApplicationStatus.PENDING.value}

    def for_posting(self, job_posting_id: str) -> list[JobApplicationRow]:
        return self.filter_by(job_posting_id=job_posting_id)


class CourseStore(EntityStore[CourseRow]):
    table = "courses"
    label = "course"
    plural = "courses"


class CourseEnrollmentStore(EntityStore[CourseEnrollmentRow]):
    table = "course_enrollments"
    label = "enrollment"
    plural = "enrollments"
    order_column = "enrolled_at"

    def for_employee(self, employee_id: str) -> list[CourseEnrollmentRow]:
        return self.filter_by(employee_id=employee_id)


class CertificationStore(EntityStore[CertificationRow]):
    table = "certifications"
    label = "certification"
    plural = "certifications"

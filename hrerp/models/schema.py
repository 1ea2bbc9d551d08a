"""Wire shapes of the backend tables.

Row models mirror the columns and nullability of the hosted database. They are
used to parse what the REST interface returns; the database itself enforces
the constraints.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel


class EmploymentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class LeaveType(str, Enum):
    ANNUAL = "annual"
    SICK = "sick"
    PERSONAL = "personal"
    MATERNITY = "maternity"
    PATERNITY = "paternity"
    EMERGENCY = "emergency"


class PerformanceRating(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    SATISFACTORY = "satisfactory"
    NEEDS_IMPROVEMENT = "needs_improvement"
    UNSATISFACTORY = "unsatisfactory"


class UserRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"
    HR = "hr"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    INTERVIEWED = "interviewed"
    OFFERED = "offered"
    HIRED = "hired"
    REJECTED = "rejected"


class AttendanceRow(BaseModel):
    id: str
    employee_id: str
    date: str
    clock_in: str | None = None
    clock_out: str | None = None
    break_duration: float | None = None
    total_hours: float | None = None
    status: str | None = None
    notes: str | None = None
    created_at: str | None = None


class CertificationRow(BaseModel):
    id: str
    employee_id: str
    name: str
    issuing_organization: str | None = None
    issue_date: str | None = None
    expiration_date: str | None = None
    certificate_url: str | None = None
    status: str | None = None
    created_at: str | None = None


class CourseEnrollmentRow(BaseModel):
    id: str
    course_id: str
    employee_id: str
    enrolled_at: str | None = None
    completed_at: str | None = None
    progress_percentage: float | None = None
    status: str | None = None


class CourseRow(BaseModel):
    id: str
    title: str
    description: str | None = None
    instructor: str | None = None
    duration_hours: float | None = None
    category: str | None = None
    difficulty_level: str | None = None
    thumbnail_url: str | None = None
    content_url: str | None = None
    is_active: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None


class DepartmentRow(BaseModel):
    id: str
    name: str
    description: str | None = None
    manager_id: str | None = None
    created_at: str | None = None


class EmployeeRow(BaseModel):
    id: str
    employee_id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    department: str | None = None
    position: str | None = None
    location: str | None = None
    hire_date: str | None = None
    salary: float | None = None
    status: EmploymentStatus | None = None
    manager_id: str | None = None
    avatar_url: str | None = None
    user_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class JobApplicationRow(BaseModel):
    id: str
    job_posting_id: str
    applicant_name: str
    applicant_email: str
    applicant_phone: str | None = None
    cover_letter: str | None = None
    resume_url: str | None = None
    status: ApplicationStatus | None = None
    applied_at: str | None = None
    updated_at: str | None = None


class JobPostingRow(BaseModel):
    id: str
    title: str
    department: str
    description: str | None = None
    requirements: str | None = None
    location: str | None = None
    job_type: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    status: str | None = None
    posted_by: str | None = None
    applications_count: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


class LeaveRequestRow(BaseModel):
    id: str
    employee_id: str
    leave_type: LeaveType
    start_date: str
    end_date: str
    days_requested: float
    reason: str | None = None
    status: LeaveStatus | None = None
    approved_by: str | None = None
    approved_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class PayrollRow(BaseModel):
    id: str
    employee_id: str
    pay_period_start: str
    pay_period_end: str
    base_salary: float | None = None
    overtime_hours: float | None = None
    overtime_rate: float | None = None
    bonuses: float | None = None
    deductions: float | None = None
    tax_deductions: float | None = None
    gross_pay: float | None = None
    net_pay: float | None = None
    status: str | None = None
    processed_at: str | None = None
    created_at: str | None = None


class PerformanceReviewRow(BaseModel):
    id: str
    employee_id: str
    reviewer_id: str
    review_period_start: str
    review_period_end: str
    overall_rating: PerformanceRating | None = None
    goals: str | None = None
    achievements: str | None = None
    areas_for_improvement: str | None = None
    comments: str | None = None
    status: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class ProfileRow(BaseModel):
    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    role: UserRole | None = None
    avatar_url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class Relationship:
    column: str
    references_table: str
    references_column: str = "id"


@dataclass(frozen=True)
class TableSpec:
    name: str
    row: type[BaseModel]
    required_on_insert: frozenset[str]
    relationships: tuple[Relationship, ...] = ()

    @property
    def nullable_columns(self) -> frozenset[str]:
        return frozenset(
            name for name, info in self.row.model_fields.items() if not info.is_required()
        )


def _employee_fk(column: str = "employee_id") -> Relationship:
    return Relationship(column, "employees")


TABLES: dict[str, TableSpec] = {
    spec.name: spec
    for spec in (
        TableSpec(
            "attendance",
            AttendanceRow,
            frozenset({"employee_id", "date"}),
            (_employee_fk(),),
        ),
        TableSpec(
            "certifications",
            CertificationRow,
            frozenset({"employee_id", "name"}),
            (_employee_fk(),),
        ),
        TableSpec(
            "course_enrollments",
            CourseEnrollmentRow,
            frozenset({"course_id", "employee_id"}),
            (Relationship("course_id", "courses"), _employee_fk()),
        ),
        TableSpec("courses", CourseRow, frozenset({"title"})),
        TableSpec(
            "departments",
            DepartmentRow,
            frozenset({"name"}),
            (_employee_fk("manager_id"),),
        ),
        TableSpec(
            "employees",
            EmployeeRow,
            frozenset({"employee_id", "first_name", "last_name", "email"}),
            (_employee_fk("manager_id"),),
        ),
        TableSpec(
            "job_applications",
            JobApplicationRow,
            frozenset({"job_posting_id", "applicant_name", "applicant_email"}),
            (Relationship("job_posting_id", "job_postings"),),
        ),
        TableSpec(
            "job_postings",
            JobPostingRow,
            frozenset({"title", "department"}),
            (_employee_fk("posted_by"),),
        ),
        TableSpec(
            "leave_requests",
            LeaveRequestRow,
            frozenset({"employee_id", "leave_type", "start_date", "end_date", "days_requested"}),
            (_employee_fk("approved_by"), _employee_fk()),
        ),
        TableSpec(
            "payroll",
            PayrollRow,
            frozenset({"employee_id", "pay_period_start", "pay_period_end"}),
            (_employee_fk(),),
        ),
        TableSpec(
            "performance_reviews",
            PerformanceReviewRow,
            frozenset({"employee_id", "reviewer_id", "review_period_start", "review_period_end"}),
            (_employee_fk(), _employee_fk("reviewer_id")),
        ),
        TableSpec("profiles", ProfileRow, frozenset({"id"})),
    )
}


def validate_insert(table: str, row: dict[str, Any]) -> None:
    """Raise ``ValueError`` if ``row`` lacks a column the table requires on insert."""
    spec = TABLES.get(table)
    if spec is None:
        raise ValueError(f"Unknown table: {table}")

    missing = sorted(col for col in spec.required_on_insert if row.get(col) is None)
    if missing:
        raise ValueError(f"Missing required columns for {table}: {', '.join(missing)}")

    unknown = sorted(set(row) - set(spec.row.model_fields))
    if unknown:
        raise ValueError(f"Unknown columns for {table}: {', '.join(unknown)}")

"""Employee view-models as consumed by the presentation layer."""

from __future__ import annotations

from pydantic import BaseModel

from hrerp.models.schema import EmploymentStatus

DEFAULT_DISPLAY_NAME = "User"


def display_name(first: str | None, last: str | None) -> str:
    """Join given and family name; fall back to ``"User"`` when both are empty."""
    joined = " ".join(part.strip() for part in (first or "", last or "") if part and part.strip())
    return joined or DEFAULT_DISPLAY_NAME


def split_name(name: str | None) -> tuple[str, str]:
    """Split a combined name into the first token and the remainder."""
    parts = (name or "").split(maxsplit=1)
    first = parts[0] if parts else ""
    last = parts[1].strip() if len(parts) > 1 else ""
    return first, last


class Employee(BaseModel):
    id: str
    employee_code: str | None = None
    name: str = DEFAULT_DISPLAY_NAME
    email: str = ""
    phone: str = ""
    department: str = ""
    position: str = ""
    location: str = ""
    status: EmploymentStatus | None = None
    avatar: str | None = None
    start_date: str | None = None
    salary: float | None = None
    manager_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class EmployeeCreate(BaseModel):
    """Fields accepted when adding an employee. The employee code is generated."""

    name: str = ""
    email: str
    phone: str | None = None
    department: str | None = None
    position: str | None = None
    location: str | None = None
    status: EmploymentStatus = EmploymentStatus.ACTIVE
    start_date: str | None = None
    salary: float | None = None
    manager_id: str | None = None


class EmployeeUpdate(BaseModel):
    """Sparse update. Only fields explicitly set are sent to the backend."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    department: str | None = None
    position: str | None = None
    location: str | None = None
    status: EmploymentStatus | None = None
    start_date: str | None = None
    salary: float | None = None
    manager_id: str | None = None


class EmployeeStats(BaseModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    departments: int = 0

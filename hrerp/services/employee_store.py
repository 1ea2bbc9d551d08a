"""Employee data access: backend rows <-> ``Employee`` view-models."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any

from hrerp.core.notifications import Notifier, logging_notifier
from hrerp.models.employee import (
    Employee,
    EmployeeCreate,
    EmployeeStats,
    EmployeeUpdate,
    display_name,
    split_name,
)
from hrerp.models.schema import EmployeeRow, EmploymentStatus, validate_insert
from hrerp.services.entity_store import WILDCARD, EntityStore

logger = logging.getLogger(__name__)

# View-model field -> employees column, where the names differ
_COLUMN_FOR_FIELD: dict[str, str] = {
    "start_date": "hire_date",
    "avatar": "avatar_url",
    "employee_code": "employee_id",
}
_FIELD_FOR_COLUMN = {column: field for field, column in _COLUMN_FOR_FIELD.items()}
_FIELD_FOR_COLUMN.update({"first_name": "name", "last_name": "name"})


def generate_employee_code(prefix: str = "EMP") -> str:
    return f"{prefix}{str(int(time.time() * 1000))[-6:]}"


def row_to_employee(raw: dict[str, Any]) -> Employee:
    row = EmployeeRow.model_validate(raw)
    return Employee(
        id=row.id,
        employee_code=row.employee_id,
        name=display_name(row.first_name, row.last_name),
        email=row.email,
        phone=row.phone or "",
        department=row.department or "",
        position=row.position or "",
        location=row.location or "",
        status=row.status,
        avatar=row.avatar_url,
        start_date=row.hire_date,
        salary=row.salary,
        manager_id=row.manager_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class EmployeeStore(EntityStore[Employee]):
    table = "employees"
    label = "employee"
    plural = "employees"

    def __init__(
        self,
        backend: Any,
        notifier: Notifier = logging_notifier,
        code_prefix: str = "EMP",
    ) -> None:
        super().__init__(backend, notifier)
        self.code_prefix = code_prefix

    def to_view_model(self, row: dict[str, Any]) -> Employee:
        return row_to_employee(row)

    def prepare_insert(self, data: EmployeeCreate | dict[str, Any]) -> dict[str, Any]:
        if not isinstance(data, EmployeeCreate):
            data = EmployeeCreate.model_validate(data)
        if not data.email.strip():
            raise ValueError("email is required")

        first_name, last_name = split_name(data.name)
        row = {
            "employee_id": generate_employee_code(self.code_prefix),
            "first_name": first_name,
            "last_name": last_name,
            "email": data.email.strip(),
            "phone": data.phone,
            "department": data.department,
            "position": data.position,
            "location": data.location,
            "hire_date": data.start_date,
            "salary": data.salary,
            "manager_id": data.manager_id,
            "status": (data.status or EmploymentStatus.ACTIVE).value,
        }
        row = {column: value for column, value in row.items() if value is not None}
        validate_insert(self.table, row)
        return row

    def prepare_patch(self, changes: EmployeeUpdate | dict[str, Any]) -> dict[str, Any]:
        if not isinstance(changes, EmployeeUpdate):
            changes = EmployeeUpdate.model_validate(changes)

        patch: dict[str, Any] = {}
        for field in sorted(changes.model_fields_set):
            value = getattr(changes, field)
            if field == "name":
                if value is None:
                    continue
                patch["first_name"], patch["last_name"] = split_name(value)
            elif field == "email":
                if not value:
                    continue
                patch["email"] = value
            else:
                column = _COLUMN_FOR_FIELD.get(field, field)
                patch[column] = value.value if isinstance(value, Enum) else value

        if not patch:
            raise ValueError("No fields to update")
        return patch

    def confirmed_fields(self, patch: dict[str, Any]) -> set[str]:
        return {_FIELD_FOR_COLUMN.get(column, column) for column in patch} | {"updated_at"}

    def search(
        self,
        term: str,
        department: str | None = None,
        status: str | None = None,
    ) -> list[Employee]:
        needle = (term or "").lower()

        def _matches(employee: Employee) -> bool:
            matches_text = (
                needle in employee.name.lower()
                or needle in employee.email.lower()
                or needle in employee.position.lower()
            )
            matches_department = not department or department == WILDCARD or employee.department == department
            matches_status = not status or status == WILDCARD or employee.status == status
            return matches_text and matches_department and matches_status

        return [employee for employee in self.items if _matches(employee)]

    def list_departments(self) -> list[str]:
        return sorted({employee.department for employee in self.items if employee.department})

    def stats(self) -> EmployeeStats:
        return EmployeeStats(
            total=len(self.items),
            active=sum(1 for e in self.items if e.status == EmploymentStatus.ACTIVE),
            inactive=sum(1 for e in self.items if e.status == EmploymentStatus.INACTIVE),
            departments=len(self.list_departments()),
        )

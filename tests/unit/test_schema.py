from __future__ import annotations

import pytest

from hrerp.models.schema import TABLES, EmploymentStatus, Relationship, UserRole, validate_insert


def test_every_table_is_declared():
    assert set(TABLES) == {
        "attendance",
        "certifications",
        "course_enrollments",
        "courses",
        "departments",
        "employees",
        "job_applications",
        "job_postings",
        "leave_requests",
        "payroll",
        "performance_reviews",
        "profiles",
    }


def test_required_insert_columns_exist_on_rows():
    for spec in TABLES.values():
        assert spec.required_on_insert <= set(spec.row.model_fields), spec.name


def test_relationships_point_at_declared_tables():
    for spec in TABLES.values():
        for rel in spec.relationships:
            assert rel.column in spec.row.model_fields, spec.name
            assert rel.references_table in TABLES


def test_employee_manager_is_self_referential():
    assert Relationship("manager_id", "employees") in TABLES["employees"].relationships
    assert Relationship("manager_id", "employees") in TABLES["departments"].relationships


def test_nullable_columns():
    nullable = TABLES["employees"].nullable_columns
    assert "salary" in nullable
    assert "phone" in nullable
    assert "email" not in nullable
    assert "first_name" not in nullable


def test_validate_insert_accepts_complete_row():
    validate_insert("courses", {"title": "Onboarding 101"})


def test_validate_insert_reports_missing_columns():
    with pytest.raises(ValueError, match="Missing required columns for employees: email, employee_id"):
        validate_insert("employees", {"first_name": "Jane", "last_name": "Doe"})


def test_validate_insert_rejects_unknown_columns():
    with pytest.raises(ValueError, match="Unknown columns for departments: budget"):
        validate_insert("departments", {"name": "Finance", "budget": 10})


def test_validate_insert_rejects_unknown_table():
    with pytest.raises(ValueError, match="Unknown table"):
        validate_insert("salaries", {})


def test_enum_values_match_backend_literals():
    assert [s.value for s in EmploymentStatus] == ["active", "inactive", "terminated"]
    assert [r.value for r in UserRole] == ["admin", "manager", "employee", "hr"]

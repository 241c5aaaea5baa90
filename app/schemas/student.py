# app/schemas/student.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional
from uuid import UUID
from datetime import datetime


# ------------------------------------------------------------
# STUDENT CREATE (REGISTRY)
# ------------------------------------------------------------
class StudentCreate(BaseModel):
    student_number: str = Field(min_length=1)
    program_name: Optional[str] = None
    faculty_id: Optional[int] = None
    department_id: Optional[int] = None

    year_of_study: int = Field(default=1, ge=1)
    semester_of_study: Literal["1", "2"] = "1"
    gpa: float = Field(default=0.0, ge=0, le=5)
    attendance: float = Field(default=0.0, ge=0, le=100)
    balance: float = 0.0

    @field_validator("semester_of_study", mode="before")
    @classmethod
    def normalize_semester(cls, v):
        """Accepts 1/2 as numbers as well as strings."""
        return str(v).strip() if v is not None else "1"


# ------------------------------------------------------------
# STUDENT UPDATE (REGISTRY, ADVISOR for assigned students)
# ------------------------------------------------------------
class StudentUpdate(BaseModel):
    program_name: Optional[str] = None
    year_of_study: Optional[int] = Field(default=None, ge=1)
    semester_of_study: Optional[Literal["1", "2"]] = None
    gpa: Optional[float] = Field(default=None, ge=0, le=5)
    attendance: Optional[float] = Field(default=None, ge=0, le=100)
    balance: Optional[float] = None


# ------------------------------------------------------------
# FULL STUDENT READ
# ------------------------------------------------------------
# Identity and risk fields are optional because the visibility gate
# strips them before the response is built.
class StudentRead(BaseModel):
    id: Optional[UUID] = None
    student_number: Optional[str] = None

    program_name: str
    faculty_id: Optional[int] = None
    department_id: Optional[int] = None
    year_of_study: int
    semester_of_study: str
    gpa: float
    attendance: float
    balance: float

    risk_score: Optional[float] = None
    risk_level: Optional[str] = None

    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


class StudentPage(BaseModel):
    students: List[dict]
    pagination: Pagination


# ------------------------------------------------------------
# DATA INTEGRITY ALERTS
# ------------------------------------------------------------
class IntegrityThresholds(BaseModel):
    critical_gpa: float
    warning_attendance: float
    financial_limit: float


class IntegritySummary(BaseModel):
    total_students: int
    with_financial_risk: int
    with_attendance_risk: int
    with_academic_risk: int
    incomplete_records: int
    with_no_issues: int


class IntegrityStudents(BaseModel):
    financial_risk: List[dict]
    attendance_risk: List[dict]
    academic_risk: List[dict]
    incomplete_records: List[dict]
    no_issues: List[dict]


class DataIntegrityAlerts(BaseModel):
    thresholds: IntegrityThresholds
    summary: IntegritySummary
    students: IntegrityStudents

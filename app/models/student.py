from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Integer, Float, String, ForeignKey, DateTime
from datetime import datetime
from typing import Optional
import uuid


class Student(SQLModel, table=True):
    __tablename__ = "students"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    student_number: str = Field(
        sa_column=Column(String, nullable=False, unique=True, index=True)
    )

    # Legacy free-text programme name. Records imported before the
    # faculty/department foreign keys existed only carry this.
    program_name: str = Field(
        sa_column=Column(String, nullable=False, index=True)
    )

    faculty_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("faculties.id"), nullable=True, index=True)
    )
    department_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("departments.id"), nullable=True, index=True)
    )

    year_of_study: int = Field(default=1, ge=1)
    semester_of_study: str = Field(
        default="1",
        sa_column=Column(String(1), nullable=False, default="1")
    )

    gpa: float = Field(default=0.0, sa_column=Column(Float, nullable=False, default=0.0))
    attendance: float = Field(default=0.0, sa_column=Column(Float, nullable=False, default=0.0))
    balance: float = Field(default=0.0, sa_column=Column(Float, nullable=False, default=0.0))

    # Written by the risk scoring job, never computed here
    risk_score: Optional[float] = Field(default=None, sa_column=Column(Float, nullable=True))
    risk_level: Optional[str] = Field(default=None, sa_column=Column(String(16), nullable=True))

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

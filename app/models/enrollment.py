from sqlmodel import SQLModel, Field, Column
from sqlalchemy import String, Float, Integer, ForeignKey, DateTime, UniqueConstraint
from datetime import datetime
from typing import Optional
import uuid

from app.models.enums import EnrollmentStatus


class CourseEnrollment(SQLModel, table=True):
    __tablename__ = "course_enrollments"
    __table_args__ = (
        UniqueConstraint(
            "student_id", "course_id", "semester", "academic_year",
            name="uq_enrollment_student_course_term",
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    student_id: uuid.UUID = Field(foreign_key="students.id", index=True)
    course_id: int = Field(
        sa_column=Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    )

    semester: str = Field(sa_column=Column(String(1), nullable=False))
    academic_year: int = Field(index=True)

    grade: Optional[float] = Field(default=None, sa_column=Column(Float, nullable=True))
    attendance: Optional[float] = Field(default=None, sa_column=Column(Float, nullable=True))

    status: str = Field(
        default=EnrollmentStatus.ENROLLED.value,
        sa_column=Column(String(16), nullable=False, default=EnrollmentStatus.ENROLLED.value)
    )

    enrolled_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    completed_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True)
    )

# app/models/user.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, ForeignKey, String, JSON, Boolean
from datetime import datetime
import uuid
from typing import Optional, List


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    full_name: str = Field(nullable=False)
    email: str = Field(nullable=False, index=True, unique=True)
    password_hash: str = Field(nullable=False)

    # Stored as plain text so a value written by a newer deployment
    # (unknown to this enum) still loads and is denied at resolution time.
    role: str = Field(sa_column=Column(String(32), nullable=False, index=True))

    # DEAN, HOD, LECTURER
    faculty_id: Optional[int] = Field(
        default=None,
        sa_column=Column(ForeignKey("faculties.id"), nullable=True)
    )

    # HOD, LECTURER
    department_id: Optional[int] = Field(
        default=None,
        sa_column=Column(ForeignKey("departments.id"), nullable=True)
    )

    # LECTURER: course ids, ADVISOR: student uuids (as strings)
    assigned_course_ids: List[int] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list)
    )
    assigned_student_ids: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list)
    )

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True)
    )

    last_login: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True)
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

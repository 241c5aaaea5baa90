from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.department import Department


# ------------------------------------------------------------
# COURSE (e.g., CS101, BIT201)
# ------------------------------------------------------------
class Course(SQLModel, table=True):
    __tablename__ = "courses"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True)
    )
    name: str = Field(sa_column=Column(String, nullable=False))
    code: str = Field(sa_column=Column(String(32), nullable=False, unique=True, index=True))

    department_id: int = Field(
        sa_column=Column(Integer, ForeignKey("departments.id"), nullable=False, index=True)
    )

    credits: Optional[int] = Field(default=None)

    # Deactivated courses keep their rows (historical enrollments point at them)
    # but no longer grant lecturer access.
    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, default=True, nullable=False)
    )

    department: Optional["Department"] = Relationship(back_populates="courses")

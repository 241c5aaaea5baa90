from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from typing import Optional, List, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.faculty import Faculty
    from app.models.course import Course


class Department(SQLModel, table=True):
    __tablename__ = "departments"

    # Primary Key must be ONLY inside sa_column
    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True)
    )

    name: str = Field(
        sa_column=Column(String(128), nullable=False)
    )

    code: str = Field(
        sa_column=Column(String(32), nullable=False, unique=True)
    )

    faculty_id: int = Field(
        sa_column=Column(Integer, ForeignKey("faculties.id"), nullable=False, index=True)
    )

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, default=True, nullable=False)
    )

    faculty: Optional["Faculty"] = Relationship(back_populates="departments")
    courses: List["Course"] = Relationship(back_populates="department")

from typing import Optional, List, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, Integer, String, Boolean

# Prevent circular imports
if TYPE_CHECKING:
    from app.models.department import Department


class Faculty(SQLModel, table=True):
    __tablename__ = "faculties"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True)
    )

    name: str = Field(
        sa_column=Column(String, nullable=False, unique=True)
    )

    code: str = Field(
        sa_column=Column(String(32), unique=True, nullable=False)
    )

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, default=True, nullable=False)
    )

    # --------------------------------------------------------
    # RELATIONSHIPS
    # --------------------------------------------------------
    departments: List["Department"] = Relationship(back_populates="faculty")

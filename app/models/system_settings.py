# app/models/system_settings.py

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Boolean, Integer, DateTime
from typing import Optional
from uuid import UUID
from datetime import datetime


class SystemSettings(SQLModel, table=True):
    """Single-row table of runtime-mutable, system-wide switches."""

    __tablename__ = "system_settings"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True)
    )

    # REGISTRY sees every record but not risk classifications unless this is on
    registry_can_view_risk_scores: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False)
    )

    updated_by: Optional[UUID] = Field(default=None, foreign_key="users.id")
    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

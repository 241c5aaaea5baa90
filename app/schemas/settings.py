from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class RegistryRiskVisibilityUpdate(BaseModel):
    enabled: bool


class RegistryRiskVisibilityRead(BaseModel):
    registry_can_view_risk_scores: bool
    updated_by: Optional[UUID] = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

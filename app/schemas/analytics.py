from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class ProgramCount(BaseModel):
    program: str
    total: int


class AnalyticsMetrics(BaseModel):
    total_students: int
    average_attendance: float
    average_gpa: float
    total_balance: Optional[float] = None
    program_breakdown: Optional[List[ProgramCount]] = None


class AnalyticsResponse(BaseModel):
    scope: str               # university / faculty / department / registry
    period: datetime
    faculty_id: Optional[int] = None
    department_id: Optional[int] = None
    metrics: AnalyticsMetrics

from datetime import datetime
from typing import Dict, List, Literal
from pydantic import BaseModel

CheckStatus = Literal["pending", "healthy", "warning", "unhealthy"]


class CheckResult(BaseModel):
    status: CheckStatus = "pending"
    message: str = ""
    duration_ms: int = 0


class HealthReport(BaseModel):
    timestamp: datetime
    overall_status: CheckStatus
    overall_score: int
    total_duration_ms: int
    checks: Dict[str, CheckResult]
    recommendations: List[str]


class QuickHealth(BaseModel):
    healthy: bool
    timestamp: datetime
    error: str | None = None

from typing import Dict, List
from pydantic import BaseModel


class EstimatedTime(BaseModel):
    seconds: int
    minutes: int
    formatted: str


class ComputeCost(BaseModel):
    minutes: int
    estimated: str = "$0.00"


class CostBreakdown(BaseModel):
    api_calls: int = 0
    compute: ComputeCost
    total: str = "$0.00"
    note: str = "Notion API calls are free, compute costs are typically included in CI/CD platforms"


class CostEstimate(BaseModel):
    tier: str
    total_units: int
    estimated_time: EstimatedTime
    breakdown: Dict[str, int]
    rate_limit: str
    include_sample_data: bool
    cost: CostBreakdown
    recommendations: List[str]

from typing import Dict
from fastapi import APIRouter, HTTPException
from template_deployer.core.errors import UnknownTierError
from template_deployer.core.estimator import compare_tiers, estimate_cost
from template_deployer.schemas.estimate import CostEstimate

router = APIRouter(prefix="/estimates")

@router.get("", response_model=Dict[str, CostEstimate])
def all_estimates(include_sample_data: bool = True):
    return compare_tiers(include_sample_data)

@router.get("/{tier}", response_model=CostEstimate)
def tier_estimate(tier: str, include_sample_data: bool = True):
    try:
        return estimate_cost(tier, include_sample_data)
    except UnknownTierError as e:
        raise HTTPException(status_code=404, detail=str(e))

from fastapi import APIRouter
from template_deployer.api.routes_health import router as health_router
from template_deployer.api.routes_builds import router as builds_router
from template_deployer.api.routes_estimates import router as estimates_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(builds_router, tags=["builds"])
router.include_router(estimates_router, tags=["estimates"])

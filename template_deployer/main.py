import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from template_deployer import __version__
from template_deployer.core.config import settings
from template_deployer.core.logging import configure_logging
from template_deployer.api.routes import router as api_router

configure_logging(settings.log_level)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    log.info("Starting API server (env=%s)", settings.app_env)
    if not settings.notion_token:
        log.warning("NOTION_TOKEN is not set; /v1/health/notion will report 503")
    yield
    log.info("Shutting down API server...")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    lifespan=lifespan
)
app.include_router(api_router, prefix="/v1")

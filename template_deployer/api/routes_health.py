from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from template_deployer import __version__
from template_deployer.api.deps import get_notion_client
from template_deployer.core.health import quick_health_check
from template_deployer.core.notion import NotionClient

router = APIRouter()

@router.get("/health")
def health():
    return {"status": "ok", "version": __version__}

@router.get("/health/notion")
async def notion_health(client: NotionClient = Depends(get_notion_client)):
    result = await quick_health_check(client)
    return JSONResponse(
        status_code=200 if result.healthy else 503,
        content=result.model_dump(mode="json"),
    )

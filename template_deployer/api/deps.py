from pathlib import Path
from fastapi import HTTPException
from template_deployer.core.config import settings
from template_deployer.core.notion import NotionClient
from template_deployer.generators.template_gen.writer import ArtifactStore


def get_artifact_store() -> ArtifactStore:
    return ArtifactStore(Path(settings.dist_dir))


def get_notion_client() -> NotionClient:
    if not settings.notion_token:
        raise HTTPException(status_code=503, detail="NOTION_TOKEN is not configured")
    return NotionClient(token=settings.notion_token)

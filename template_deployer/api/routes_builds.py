import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from template_deployer.api.deps import get_artifact_store
from template_deployer.catalog.tiers import resolve
from template_deployer.core.errors import ArtifactNotFoundError, ConfigurationError
from template_deployer.generators.template_gen import ArtifactStore, compile_template
from template_deployer.schemas.build import BuildPackage
from template_deployer.schemas.requests import BuildCreateRequest, BuildResponse

log = logging.getLogger(__name__)

router = APIRouter(prefix="/builds")


def _to_response(package: BuildPackage, path: Optional[str] = None) -> BuildResponse:
    return BuildResponse(
        build_id=package.build_id,
        client=package.client,
        tier=package.tier,
        version=package.version,
        timestamp=package.timestamp,
        database_count=package.metadata.database_count,
        view_count=package.metadata.view_count,
        sample_record_count=package.metadata.sample_record_count,
        defaulted_schemas=package.metadata.defaulted_schemas,
        path=path,
    )

@router.post("", response_model=BuildResponse, status_code=201)
def create_build(req: BuildCreateRequest, store: ArtifactStore = Depends(get_artifact_store)):
    try:
        package = compile_template(req.client, req.tier, req.include_sample_data)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    path = store.save_build(package)
    log.info("Build %s saved", package.build_id, extra={"client": package.client, "phase": "-"})
    return _to_response(package, str(path))

@router.get("/{tier}/latest", response_model=BuildResponse)
def latest_build(tier: str, store: ArtifactStore = Depends(get_artifact_store)):
    try:
        resolve(tier)
        package = store.latest_build(tier)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ArtifactNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _to_response(package)

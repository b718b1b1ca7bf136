from pydantic import BaseModel, Field
from typing import Literal, List, Optional
from datetime import datetime

class BuildCreateRequest(BaseModel):
    client: str = Field(..., examples=["Acme Construction"])
    tier: Literal["starter", "professional", "enterprise"] = "professional"
    include_sample_data: bool = True

class BuildResponse(BaseModel):
    build_id: str
    client: str
    tier: str
    version: str
    timestamp: datetime
    database_count: int
    view_count: int
    sample_record_count: int
    defaulted_schemas: List[str] = []
    path: Optional[str] = None

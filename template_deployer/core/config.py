from pathlib import Path
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "data" / "schemas"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_name: str = "construction-template-deployer"
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    log_level: str = "INFO"

    client_name: str | None = None
    deployment_tier: str = "professional"
    notion_token: str | None = None
    include_sample_data: bool | None = None
    deployment_region: str | None = None
    custom_domain: str | None = None

    notion_api_base: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"
    api_timeout: float = 30.0
    retry_attempts: int = 3
    retry_delay: float = 1.0

    dist_dir: str = "dist"
    schemas_dir: str = str(BUNDLED_SCHEMAS_DIR)

    pacing_strategy: Literal["fixed", "token_bucket"] = "fixed"
    database_pacing_seconds: float = 1.0
    record_pacing_seconds: float = 0.5

settings = Settings()

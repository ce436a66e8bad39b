from __future__ import annotations

from functools import lru_cache
from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unrelated env keys so local/dev .env can include frontend settings.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Sales Dashboard KPI Engine"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    default_top_n: int = Field(default=6, ge=1, le=50, alias="DEFAULT_TOP_N")
    default_goal_ft: float = Field(default=6.5, gt=0, alias="DEFAULT_GOAL_FT")
    default_goal_pt: float = Field(default=4.0, gt=0, alias="DEFAULT_GOAL_PT")

    def goal_table(self) -> Dict[str, float]:
        return {"FT": self.default_goal_ft, "PT": self.default_goal_pt}


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]

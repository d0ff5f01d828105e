from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    """
    Ambient settings leveraging environment overrides.

    File names and the dropped field are fixed constants in
    ``results_cleaner.transform.service`` and are not read from here.
    Unrelated keys in a ``.env`` file are ignored.
    """

    log_level: LogLevel = Field("WARNING", description="Root logging level for the CLI")
    log_format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    max_input_bytes: int = Field(512 * 1024 * 1024, ge=1)  # 512 MB soft limit
    # orjson stops encoding past 255 levels
    max_json_depth: int = Field(128, ge=1, le=250)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    class Config:
        env_prefix = "RESULTS_CLEANER_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()

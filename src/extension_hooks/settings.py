from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="", extra="ignore")

    log_level: str = Field(default="INFO", alias="HOOKS_LOG_LEVEL")
    logger_name: str = Field(default="extension_hooks", alias="HOOKS_LOGGER_NAME")
    structured_logs: bool = Field(default=True, alias="HOOKS_STRUCTURED_LOGS")
    operation_origin_prefix: str = Field(
        default="operations/", alias="HOOKS_OPERATION_ORIGIN_PREFIX"
    )

    def operation_origin(self, operation: str) -> str:
        return f"{self.operation_origin_prefix}{operation}"


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DTOGEN_", env_file=".env", extra="ignore")

    # Generation
    DTO_SUFFIX: str = "DTO"
    TARGET_DIALECT: str = "python"  # python | csharp
    OUTPUT_DIR: str = "generated"
    STRING_TYPE_NAMES: list[str] = ["string", "System.String", "str", "builtins.str"]
    MAX_WORKERS: int = 1

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for CI (structured JSON), False for dev (colored)


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

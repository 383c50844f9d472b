# nutriplan/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API / Server
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8090
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    # Defaults applied when a profile request omits its schedule
    DEFAULT_WAKE_TIME: str = "07:00"
    DEFAULT_BED_TIME: str = "22:00"
    DEFAULT_MEALS_PER_DAY: int = 3


settings = Settings()

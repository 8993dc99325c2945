# filmorate_api/core/config.py
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "filmorate"
    env: str = Field(default="local")
    host: str = "0.0.0.0"
    port: int = 8080

    # memory — как в исходном сервисе, mongo — для стенда
    storage_backend: Literal["memory", "mongo"] = Field(
        default="memory",
        alias="STORAGE_BACKEND"
    )
    mongo_dsn: str = Field(
        default="mongodb://mongo:27017/filmorate?replicaSet=rs0",
        alias="MONGO_DSN"
    )
    mongo_db: str = "filmorate"

    popular_default_count: int = Field(default=10,
                                       alias="POPULAR_DEFAULT_COUNT")
    # старый режим дружбы: добавление сразу взаимное, без подтверждения
    friendship_auto_confirm: bool = Field(default=False,
                                          alias="FRIENDSHIP_AUTO_CONFIRM")

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")
    sentry_test_enabled: bool = Field(default=False,
                                      alias="SENTRY_TEST_ENABLED")
    # Pydantic v2: модель конфигурации
    model_config = SettingsConfigDict(env_file="infra/.env",
                                      extra="ignore",
                                      populate_by_name=True)


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    secret_key: str
    password_pepper: str
    database_url: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    cors_origins: list[str] = []
    log_level: str = "INFO"


settings = Settings()

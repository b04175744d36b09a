from pydantic_settings import BaseSettings, SettingsConfigDict
import os

class DatabaseSettings(BaseSettings):
    URL: str = os.getenv("DATABASE_URL", "postgresql://catalog_user:catalog_password@db:5432/catalog_db")
    AUTO_MIGRATE: bool = os.getenv("DB_AUTO_MIGRATE", "true").lower() == "true"

class RedisSettings(BaseSettings):
    URL: str = os.getenv("REDIS_URL", "redis://redis:6379/0")
    ENABLED: bool = os.getenv("REDIS_ENABLED", "true").lower() == "true"
    TTL_SECONDS: int = 300
    KEY_PREFIX: str = "catsearch"

class ServerSettings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False

class SearchSettings(BaseSettings):
    # Ranking weights
    EXACT_WEIGHT: float = 10.0
    PARTIAL_WEIGHT: float = 1.0
    SIMILARITY_WEIGHT: float = 5.0

    # Shorter tokens only count when they match a whole word
    MIN_PARTIAL_LENGTH: int = 3

class AuthSettings(BaseSettings):
    USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    PASSWORD: str = os.getenv("ADMIN_PASSWORD", "change-me")
    COOKIE_NAME: str = "catalog_auth_token"
    TOKEN: str = os.getenv("ADMIN_TOKEN", "VALID_TOKEN_SECRET")
    COOKIE_MAX_AGE: int = 86400  # 24h

class AppSettings(BaseSettings):
    DB: DatabaseSettings = DatabaseSettings()
    REDIS: RedisSettings = RedisSettings()
    SERVER: ServerSettings = ServerSettings()
    SEARCH: SearchSettings = SearchSettings()
    AUTH: AuthSettings = AuthSettings()

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

settings = AppSettings()

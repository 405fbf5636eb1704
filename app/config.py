import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# fallback secret for local dev only, never ship it
INSECURE_JWT_SECRET = "dev-secret-change-me"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    database_url: str = "sqlite:///./database.db"
    redis_url: str = "redis://redis:6379/0"

    jwt_secret: str = INSECURE_JWT_SECRET
    jwt_issuer: str = "secure-task-api"
    jwt_audience: str = "secure-task-api"
    jwt_expires_minutes: int = 60 * 24

    bcrypt_rounds: int = 12

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_login_per_min: int = 20

    @property
    def uses_insecure_secret(self) -> bool:
        return self.jwt_secret == INSECURE_JWT_SECRET

@lru_cache
def get_settings() -> Settings:
    return Settings()

def warn_if_insecure(settings: Settings) -> None:
    if settings.uses_insecure_secret and settings.app_env == "prod":
        logger.warning("JWT_SECRET is the built-in development default; set a real secret")

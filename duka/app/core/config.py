from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_API_KEY = "YOUR_STORE_API_KEY"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Store connection. Missing values fall back to placeholders so the app
    # still boots; the API-key gate stays off until a real key is set.
    DATABASE_URL: str = "sqlite:///./duka.db"
    STORE_API_KEY: str = PLACEHOLDER_API_KEY

    SECRET_KEY: str = "dev-insecure-key-change-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Account lockout
    MAX_LOGIN_ATTEMPTS: int = 5
    LOCKOUT_MINUTES: int = 15

    # Localization / money
    DEFAULT_LANGUAGE: str = "en"
    CURRENCY_CODE: str = "TZS"
    CURRENCY_SYMBOL: str = "TSh"

    LOG_LEVEL: str = "INFO"

    # Celery
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/1"

    # Background report exports
    EXPORT_DIR: str = "/tmp/duka-exports"

    @property
    def api_key_enabled(self) -> bool:
        return bool(self.STORE_API_KEY) and self.STORE_API_KEY != PLACEHOLDER_API_KEY


settings = Settings()

from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 5000
    ENVIRONMENT: str = "development"
    ADMIN_JWT_SECRET: str = "change-this-secret"
    FRONTEND_ORIGINS: List[str] = [
        "http://localhost:2330",
        "https://thecorporategirliearts.netlify.app",
    ]
    GUEST_TOKEN_TTL_DAYS: int = 7
    SUGGESTION_LIMIT: int = 6
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

settings = Settings()

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "CMV Dashboard API"
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Locale
    TIMEZONE: str = "America/Sao_Paulo"
    CURRENCY_SYMBOL: str = "R$"

    # Costing
    CMV_GOOD_THRESHOLD: float = 28.0
    CMV_CRITICAL_THRESHOLD: float = 35.0
    PRICE_HISTORY_MONTHS: int = 6

    # Catalog
    SEED_DEMO_DATA: bool = True

    # Gemini advisory
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_REQUEST_TIMEOUT: int = 45

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # API
    API_V1_PREFIX: str = "/api/v1"

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

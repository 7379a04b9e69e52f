from typing import Literal, List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr, field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_NAME: str = "FerreCloud API"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["local", "dev", "staging", "prod"] = "local"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    CORS_ORIGINS: str = "*"      # CSV o '*'
    LOG_LEVEL: str = "INFO"

    # DB
    DATABASE_URL: SecretStr = SecretStr("")
    DB_SSL: bool = False

    # Actualización de precios
    PRICE_LIST_MAX_MB: int = 10
    PRICE_UPDATE_PAGE_SIZE: int = 20

    # -------- validators (presencia, formato) --------
    @field_validator("DATABASE_URL")
    @classmethod
    def _required_secret(cls, v, info):
        if v is None or (hasattr(v, "get_secret_value") and v.get_secret_value() == ""):
            raise ValueError(f"{info.field_name} is required (set it in .env)")
        return v

    @field_validator("API_PREFIX")
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        v = (v or "").strip().rstrip("/")
        return v if not v or v.startswith("/") else f"/{v}"

    @field_validator("PRICE_LIST_MAX_MB", "PRICE_UPDATE_PAGE_SIZE")
    @classmethod
    def _positive(cls, v: int, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        return ["*"] if self.CORS_ORIGINS.strip() == "*" else [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def PRICE_LIST_MAX_BYTES(self) -> int:
        return self.PRICE_LIST_MAX_MB * 1024 * 1024

settings = Settings()

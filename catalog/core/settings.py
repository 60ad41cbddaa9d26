from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr, field_validator, model_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # DB
    DATABASE_URL: SecretStr = SecretStr("")
    DATABASE_SSL: bool = True

    # Pagination
    PAGINATION_SIZE_DEFAULT: int = 100
    PAGINATION_SIZE_MAX: int = 1000

    # -------- validators (presencia, formato) --------
    @field_validator("DATABASE_URL")
    @classmethod
    def _required_secret(cls, v, info):
        if v is None or (hasattr(v, "get_secret_value") and v.get_secret_value() == ""):
            raise ValueError(f"{info.field_name} is required (set it in .env)")
        return v

    @field_validator("PAGINATION_SIZE_DEFAULT", "PAGINATION_SIZE_MAX")
    @classmethod
    def _size_positive(cls, v: int, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    # -------- cross-field checks --------
    @model_validator(mode="after")
    def _cross_checks(self):
        if self.PAGINATION_SIZE_DEFAULT > self.PAGINATION_SIZE_MAX:
            raise ValueError("PAGINATION_SIZE_DEFAULT must be <= PAGINATION_SIZE_MAX")
        return self


settings = Settings()

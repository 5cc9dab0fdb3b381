from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite:///./habitlog.db"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Header set by the identity layer in front of this service.
    PRINCIPAL_HEADER: str = "X-Principal"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()

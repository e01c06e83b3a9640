from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    HOST: str = "127.0.0.1"
    PORT: int = 3000
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    RECENT_LIMIT: int = 50
    UNKNOWN_CURSOR_POLICY: str = "full_history"  # "full_history" | "error"

    API_BASE_URL: str = "http://localhost:3000"
    POLL_INTERVAL_SECONDS: float = 3.0
    HTTP_TIMEOUT_SECONDS: float = 10.0

    def cors_origin_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    def strict_cursor(self) -> bool:
        return self.UNKNOWN_CURSOR_POLICY.strip().lower() == "error"


settings = Settings()

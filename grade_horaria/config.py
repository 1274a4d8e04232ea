from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- scheduling backend ---
    SCHEDULER_BACKEND_URL: str = "http://localhost:8000"
    SCHEDULER_TIMEOUT_SECONDS: float = 120.0

    # --- CORS ---
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

settings = Settings()

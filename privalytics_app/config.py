from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """
    
    # Environment
    environment: str = "development"
    debug: bool = False
    
    # Application
    app_name: str = "Privalytics Lite"
    app_version: str = "1.0.0"
    
    # Server (PORT works too, lookups are case-insensitive)
    host: str = "127.0.0.1"
    port: int = 3001
    
    # Persistence
    database_path: str = "privalytics-lite.db"
    persistence_backend: str = "file"  # Options: "file", "memory"
    
    # Requests
    max_body_size: int = 10 * 1024  # 10kb, larger bodies get 413
    trust_forwarded_for: bool = True  # Read client address from X-Forwarded-For
    
    # Reporting
    timeseries_days: int = 30
    top_pages_limit: int = 10
    
    # Logging
    log_level: str = "INFO"
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()

"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List, Literal

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.
    
    Attributes:
        app_name: Title reported by the OpenAPI schema
        database_url: SQLAlchemy connection string
        api_prefix: Prefix under which all resource routers are mounted
        log_level: Root logging level name
        cors_origins: Origins allowed by the CORS middleware
        
        # Scheduling settings
        clinic_timezone: IANA zone used to place appointments on calendar days
        status_transition_mode: "permissive" logs unexpected status moves,
            "strict" rejects them
        
        # Pagination settings
        default_page_size: Page size used when a list request omits `limit`
        max_page_size: Upper bound accepted for `limit`
    """
    app_name: str = "Clinic Booking API"

    # Database settings
    database_url: str = "sqlite:///./clinic.db"

    # HTTP settings
    api_prefix: str = "/api"
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000"]

    # Scheduling settings
    clinic_timezone: str = "UTC"
    status_transition_mode: Literal["permissive", "strict"] = "permissive"

    # Pagination settings
    default_page_size: int = 10
    max_page_size: int = 100

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()

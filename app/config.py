"""
Configuration for the application
"""
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings
    """

    database_url: str  # SQLAlchemy async URL (postgresql+asyncpg or sqlite+aiosqlite)
    admin_token: str = ""  # Shared admin bearer token; empty disables admin routes
    log_level: str = "INFO"

    # Registration links sent on approval
    frontend_url: str = "http://localhost:5173"
    registration_path: str = "/register"

    # Comma-separated list of extra CORS origins
    allowed_origins: str = "http://localhost:5173,http://localhost:3000"

    create_tables_on_startup: bool = False

    class Config:
        """
        Configuration for the application settings
        """
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        if self.frontend_url and self.frontend_url not in origins:
            origins.append(self.frontend_url)
        return origins

    def registration_link(self, token: str) -> str:
        """
        Build the public link a newly approved member uses to finish signing up.
        """
        base = self.frontend_url.rstrip("/")
        path = "/" + self.registration_path.strip("/")
        return f"{base}{path}/{token}"


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings with caching.

    Returns:
        Settings: The application configuration settings.
    """
    return Settings()

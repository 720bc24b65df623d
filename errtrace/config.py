"""
Library configuration management.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""
    
    # Logging
    log_level: str = "INFO"
    json_logs: bool = True
    log_wraps: bool = False  # DEBUG line for every propagation hop
    
    # Rendering
    short_paths: bool = False
    
    class Config:
        env_prefix = "ERRTRACE_"
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()

"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """PulseGuard server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default; there is no auth layer in front of the tools.
    pulseguard_host: str = "127.0.0.1"
    pulseguard_port: int = 8001
    pulseguard_log_level: str = "info"
    pulseguard_allow_insecure_bind: bool = False

    # Storage. Without an encryption key, records are kept in memory only.
    db_path: str = "~/.pulseguard/health.db"
    encryption_key: str = ""
    history_limit: int = 30

    # Reports
    report_lines_per_page: int = 40


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()

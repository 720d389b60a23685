"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"
DATA_EXPORTS_DIR = DATA_DIR / "exports"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class DatabaseSettings(BaseModel):
    """Product store connection settings."""
    db_path: str = str(DATA_DIR / "warehouse.db")


class ExportSettings(BaseModel):
    """Where reorder reports are written."""
    export_dir: str = str(DATA_EXPORTS_DIR)


class LoggingSettings(BaseModel):
    level: str = "INFO"


class Settings(BaseModel):
    """Top-level application settings."""
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment variables override whatever the YAML file provides.
        """
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        instance = cls(**data)
        if db_path := os.getenv("WAREHOUSE_DB_PATH"):
            instance.database.db_path = db_path
        if export_dir := os.getenv("WAREHOUSE_EXPORT_DIR"):
            instance.export.export_dir = export_dir
        if level := os.getenv("LOG_LEVEL"):
            instance.logging.level = level.upper()
        return instance

    @property
    def database_abs_path(self) -> Path:
        """Resolve database path relative to project root."""
        p = Path(self.database.db_path)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p

    @property
    def export_abs_dir(self) -> Path:
        """Resolve export dir relative to project root."""
        p = Path(self.export.export_dir)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p


# Singleton settings instance
settings = Settings.load()

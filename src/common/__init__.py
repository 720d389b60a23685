# Common utilities and shared modules
"""
Shared components used by the reorder engine, service and CLI:
- Data models (Pydantic schemas)
- SQLite product store
- Logging configuration
- Project configuration
"""

from .config import settings, PROJECT_ROOT, DATA_DIR
from .database import ProductStore, get_connection, init_db
from .logging import setup_logging

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "DATA_DIR",
    "ProductStore",
    "get_connection",
    "init_db",
    "setup_logging",
]

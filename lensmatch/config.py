import os
from pathlib import Path

from pydantic import BaseModel

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "catalog.json"


class Settings(BaseModel):
    catalog_path: str = os.getenv("CATALOG_PATH", str(DEFAULT_CATALOG_PATH))
    allow_origin: str = os.getenv("ALLOW_ORIGIN", "*")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    port: int = int(os.getenv("PORT", "8000"))

settings = Settings()

# frontend/config.py
from pydantic import BaseModel
import os

class Settings(BaseModel):
    API_URL: str = os.getenv("PLH_API_URL", "http://localhost:8080")
    HOST: str = os.getenv("PLH_FRONTEND_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PLH_FRONTEND_PORT", "8000"))
    PREVIEW_SCALE: float = float(os.getenv("PLH_PREVIEW_SCALE", "1.2"))
    LOG_LEVEL: str = os.getenv("PLH_LOG_LEVEL", "INFO")

settings = Settings()

# noteserver/config.py
from pydantic import BaseModel
import os

class Settings(BaseModel):
    DB_PATH: str = os.getenv("PLH_DB_PATH", "./data/app.db")
    UPLOAD_DIR: str = os.getenv("PLH_UPLOAD_DIR", "./data/uploads")
    HOST: str = os.getenv("PLH_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PLH_PORT", "8080"))

settings = Settings()

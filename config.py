# config.py
import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_FRONTEND_URL = "https://your-app.netlify.app"
DEFAULT_GATEWAY_URL = "https://api.abacatepay.com/v1"
LOCAL_ORIGINS = ["http://localhost:5173", "http://localhost:3000"]


class Settings(BaseModel):
  port: int = 3000
  environment: str = "production"
  frontend_url: str = DEFAULT_FRONTEND_URL
  abacatepay_api_key: str = ""
  abacatepay_base_url: str = DEFAULT_GATEWAY_URL
  abacatepay_timeout: float = 30.0
  database_url: str = ""

  @property
  def is_development(self) -> bool:
    return self.environment == "development"

  @property
  def cors_origins(self) -> List[str]:
    return [self.frontend_url] + LOCAL_ORIGINS


def get_settings() -> Settings:
  return Settings(
    port=int(os.getenv("PORT", "3000")),
    environment=os.getenv("NODE_ENV", "production").strip(),
    frontend_url=os.getenv("FRONTEND_URL", DEFAULT_FRONTEND_URL).strip() or DEFAULT_FRONTEND_URL,
    abacatepay_api_key=os.getenv("ABACATEPAY_API_KEY", "").strip(),
    abacatepay_base_url=os.getenv("ABACATEPAY_BASE_URL", DEFAULT_GATEWAY_URL).strip().rstrip("/"),
    abacatepay_timeout=float(os.getenv("ABACATEPAY_TIMEOUT", "30")),
    database_url=os.getenv("DATABASE_URL", "").strip(),
  )

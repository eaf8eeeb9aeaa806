from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

from .constants import DEFAULT_API_VERSION, DEFAULT_MODEL_ID, MAX_UPLOAD_BYTES, MIN_UPLOAD_BYTES

# Ensure environment variables from the repository root .env are available
# regardless of the working directory used to start the process.
ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(ROOT_DIR / ".env")


class Settings(BaseSettings):
  document_intelligence_endpoint: str = Field(default="", alias="DOCUMENT_INTELLIGENCE_ENDPOINT")
  document_intelligence_api_key: str | None = Field(default=None, alias="DOCUMENT_INTELLIGENCE_API_KEY")
  document_intelligence_api_version: str = Field(
    default=DEFAULT_API_VERSION, alias="DOCUMENT_INTELLIGENCE_API_VERSION"
  )
  default_model_id: str = Field(default=DEFAULT_MODEL_ID, alias="DEFAULT_MODEL_ID")
  poll_interval_seconds: float = Field(default=2.0, alias="POLL_INTERVAL_SECONDS")
  max_retries: int = Field(default=2, alias="ANALYSIS_MAX_RETRIES")
  retry_backoff_seconds: float = Field(default=2.0, alias="RETRY_BACKOFF_SECONDS")
  request_timeout_seconds: float = Field(default=30.0, alias="REQUEST_TIMEOUT_SECONDS")
  max_upload_bytes: int = Field(default=MAX_UPLOAD_BYTES, alias="MAX_UPLOAD_BYTES")
  min_upload_bytes: int = Field(default=MIN_UPLOAD_BYTES, alias="MIN_UPLOAD_BYTES")

  def ensure_endpoint(self) -> str:
    endpoint = (self.document_intelligence_endpoint or "").strip()
    if not endpoint:
      return ""
    return endpoint.rstrip("/") + "/"

  @property
  def is_analysis_configured(self) -> bool:
    return bool(self.ensure_endpoint())

  class Config:
    case_sensitive = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  return Settings()  # type: ignore[arg-type]

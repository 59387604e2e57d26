"""Application configuration."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Central application settings loaded from environment variables."""

    hf_api_key: str = Field(default="", alias="HF_API_KEY")
    hf_token: str = Field(default="", alias="HF_TOKEN")
    gemini_api_key: str = Field(default="", alias="GEMINI_API_KEY")
    hf_base_url: str = Field(default="https://router.huggingface.co/hf-inference/models", alias="HF_BASE_URL")
    hf_detection_model: str = Field(default="facebook/detr-resnet-50", alias="HF_DETECTION_MODEL")
    hf_triage_model: str = Field(default="google/gemma-2b-it", alias="HF_TRIAGE_MODEL")
    gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta", alias="GEMINI_BASE_URL")
    gemini_model: str = Field(default="gemini-1.5-flash", alias="GEMINI_MODEL")
    distress_provider: str = Field(default="huggingface", pattern=r"^(huggingface|gemini)$", alias="DISTRESS_PROVIDER")
    request_timeout_s: float = Field(default=30.0, gt=0, alias="REQUEST_TIMEOUT_S")
    llm_max_retries: int = Field(default=1, ge=0, le=3, alias="LLM_MAX_RETRIES")
    triage_max_new_tokens: int = Field(default=300, ge=16, alias="TRIAGE_MAX_NEW_TOKENS")
    strict_credentials: bool = Field(default=False, alias="STRICT_CREDENTIALS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    ui_port: int = Field(default=8501, alias="UI_PORT")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def triage_token(self) -> str:
        return self.hf_token or self.hf_api_key

    def credential_status(self) -> Dict[str, bool]:
        """Report which provider credentials are present, never their values."""

        return {
            "HF_API_KEY": bool(self.hf_api_key),
            "HF_TOKEN": bool(self.triage_token),
            "GEMINI_API_KEY": bool(self.gemini_api_key),
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()


def check_credentials(cfg: Settings) -> None:
    """Warn about missing credentials, or refuse to start in strict mode."""

    missing = [name for name, present in cfg.credential_status().items() if not present]
    if not missing:
        return
    if cfg.strict_credentials:
        raise ConfigurationError(f"Missing provider credentials: {', '.join(missing)}")
    logger.warning("Provider credentials not configured: %s", ", ".join(missing))

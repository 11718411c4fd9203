"""
Application configuration settings
"""
import os
from typing import List, Optional


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if not value:
        return None
    return float(value)


class Settings:
    """Application settings, read from the environment at process start"""

    def __init__(self):
        # App
        self.APP_TITLE: str = os.getenv("APP_TITLE", "Pod Gateway API")
        self.APP_VERSION: str = os.getenv("APP_VERSION", "1.0.0")

        # Server
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "8000"))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # CORS
        self.CORS_ORIGINS: List[str] = _env_list("CORS_ORIGINS", "*")

        # Kubernetes
        self.KUBECONFIG: Optional[str] = os.getenv("KUBECONFIG") or None
        self.KUBE_CONTEXT: Optional[str] = os.getenv("KUBE_CONTEXT") or None
        self.REQUEST_TIMEOUT: Optional[float] = _env_float("REQUEST_TIMEOUT")

        # Responses carry the error's HTTP status instead of 200 when enabled
        self.ERROR_STATUS_CODES: bool = _env_bool("ERROR_STATUS_CODES")


settings = Settings()

"""
Logging configuration handed to uvicorn
"""
import logging
from typing import Any, Dict


class LivenessProbeFilter(logging.Filter):
    """Filter to suppress liveness probe requests from the access log."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "uvicorn.access":
            # uvicorn passes (client, method, path, http_version, status)
            args = record.args
            if isinstance(args, tuple) and len(args) >= 3:
                return not (args[1] == "GET" and args[2] == "/")
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration for the gateway and uvicorn."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "liveness_probe_filter": {
                "()": LivenessProbeFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(asctime)s - %(name)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout"
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["liveness_probe_filter"]
            }
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": "INFO",
                "propagate": False
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": "INFO",
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": "INFO",
                "propagate": False
            },
            "pod_gateway": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }

"""
Pod request and response models
"""
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class PodStatus(BaseModel):
    """Phase and conditions of a pod as reported by the Kubernetes API"""
    phase: str  # "Pending", "Running", "Succeeded", "Failed", "Unknown"
    conditions: List[Dict[str, Any]]


class ResourceRequirements(BaseModel):
    """Container resource limits and requests as (resource, quantity) pairs"""
    limits: Optional[List[Tuple[str, str]]] = None
    requests: Optional[List[Tuple[str, str]]] = None

    def to_manifest(self) -> Dict[str, Dict[str, str]]:
        resources = {}
        if self.limits:
            resources["limits"] = dict(self.limits)
        if self.requests:
            resources["requests"] = dict(self.requests)
        return resources


class PodInfo(BaseModel):
    """Pod creation request"""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    image: str
    resource_requirements: Optional[ResourceRequirements] = Field(
        default=None, alias="resourceRequirements"
    )


class PodLogRequest(BaseModel):
    """Log query for the most recent lines of a pod's container"""
    pod_name: str
    tail_lines: int = Field(ge=0)


__all__ = [
    "PodStatus",
    "ResourceRequirements",
    "PodInfo",
    "PodLogRequest",
]

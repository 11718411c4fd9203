from fastapi import Request

from pod_gateway.services.k8s_client import K8sClient


def get_k8s_client(request: Request) -> K8sClient:
    """Return the Kubernetes adapter built at application startup"""
    return request.app.state.k8s_client

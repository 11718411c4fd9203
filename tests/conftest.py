"""
Pytest configuration and fixtures
"""
import pytest
from typing import AsyncGenerator, Generator
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport
from kubernetes import client

from pod_gateway.core.config import settings
from pod_gateway.main import create_app
from pod_gateway.services.k8s_client import K8sClient


# ============================================
# Kubernetes Fixtures
# ============================================

@pytest.fixture
def core_v1():
    """Mock CoreV1Api"""
    return MagicMock(spec=client.CoreV1Api)


@pytest.fixture
def k8s_client(core_v1) -> K8sClient:
    """Adapter wired to the mocked CoreV1Api"""
    return K8sClient(core_v1=core_v1)


# ============================================
# App Fixtures
# ============================================

@pytest.fixture
def app(k8s_client):
    """Create FastAPI app for testing"""
    return create_app(k8s_client=k8s_client)


@pytest.fixture
def test_client(app) -> Generator:
    """Synchronous test client"""
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def async_client(app) -> AsyncGenerator:
    """Asynchronous test client"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def error_status_codes():
    """Enable HTTP status code mapping for FAIL envelopes"""
    original = settings.ERROR_STATUS_CODES
    settings.ERROR_STATUS_CODES = True
    yield
    settings.ERROR_STATUS_CODES = original


# ============================================
# Data Fixtures
# ============================================

@pytest.fixture
def running_pod():
    """Running pod as returned by read_namespaced_pod"""
    return client.V1Pod(
        metadata=client.V1ObjectMeta(name="tester", namespace="default", uid="1234"),
        status=client.V1PodStatus(
            phase="Running",
            conditions=[
                client.V1PodCondition(type="PodScheduled", status="True"),
                client.V1PodCondition(
                    type="Ready",
                    status="False",
                    reason="ContainersNotReady",
                    message="containers with unready status: [tester]",
                ),
            ],
        ),
    )


def api_exception(status: int, reason: str, message: str = None):
    """Build an ApiException carrying a Kubernetes Status body"""
    from kubernetes.client.rest import ApiException
    import json

    exc = ApiException(status=status, reason=reason)
    if message is not None:
        exc.body = json.dumps({
            "kind": "Status",
            "apiVersion": "v1",
            "status": "Failure",
            "message": message,
            "reason": reason,
            "code": status,
        })
    return exc


@pytest.fixture
def make_api_exception():
    return api_exception


def log_response(text: str):
    """Raw urllib3 response as returned with _preload_content=False"""
    response = MagicMock()
    response.data = text.encode("utf-8")
    return response


@pytest.fixture
def make_log_response():
    return log_response

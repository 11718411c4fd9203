import logging
from typing import Any, Dict, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from pod_gateway.core.config import settings
from pod_gateway.core.errors import (
    IncompletePodStatusError,
    InvalidPodSpecError,
    UpstreamError,
    from_api_exception,
)
from pod_gateway.models.pod import PodInfo, PodLogRequest, PodStatus

logger = logging.getLogger(__name__)


def load_kube_config(config_file: Optional[str] = None, context: Optional[str] = None):
    """Load kubeconfig, falling back to the in-cluster service account"""
    try:
        config.load_kube_config(config_file=config_file, context=context)
    except config.ConfigException:
        logger.info("No usable kubeconfig found, loading in-cluster configuration")
        config.load_incluster_config()


class K8sClient:
    """Stateless adapter between the gateway's pod operations and CoreV1Api.

    Every method makes exactly one call to the Kubernetes API and raises a
    ``PodGatewayError`` subclass on failure; nothing is retried or cached.
    """

    def __init__(self, core_v1: Optional[client.CoreV1Api] = None,
                 request_timeout: Optional[float] = None):
        if core_v1 is None:
            load_kube_config(settings.KUBECONFIG, settings.KUBE_CONTEXT)
            core_v1 = client.CoreV1Api()

        self.core_v1 = core_v1
        self.request_timeout = request_timeout if request_timeout is not None else settings.REQUEST_TIMEOUT
        # Only used to render client model objects in the API's JSON shape
        self._serializer = client.ApiClient()

    def _call_kwargs(self) -> Dict[str, Any]:
        if self.request_timeout is None:
            return {}
        return {"_request_timeout": self.request_timeout}

    def _call(self, operation: str, func, *args, not_found_statuses=(404,), **kwargs):
        try:
            return func(*args, **kwargs, **self._call_kwargs())
        except ApiException as e:
            error = from_api_exception(e, not_found_statuses=not_found_statuses)
            logger.warning("%s failed: %s (%s)", operation, error, error.kind.value)
            raise error from e
        except (HTTPError, ValueError) as e:
            logger.warning("%s failed: %s", operation, e)
            raise UpstreamError(str(e)) from e

    def query_pod_status(self, namespace: str, pod_name: str) -> PodStatus:
        """Get the phase and conditions of a pod"""
        pod = self._call(
            "read pod", self.core_v1.read_namespaced_pod, name=pod_name, namespace=namespace
        )

        status = pod.status
        if status is None:
            raise IncompletePodStatusError(f"pod {namespace}/{pod_name} has no status")
        if not status.phase:
            raise IncompletePodStatusError(f"pod {namespace}/{pod_name} has no phase")
        if status.conditions is None:
            raise IncompletePodStatusError(f"pod {namespace}/{pod_name} has no conditions")

        return PodStatus(
            phase=status.phase,
            conditions=[
                self._serializer.sanitize_for_serialization(condition)
                for condition in status.conditions
            ],
        )

    def query_pod_logs(self, namespace: str, log_request: PodLogRequest) -> str:
        """Get the most recent ``tail_lines`` lines of a pod's log"""
        # Raw body: older clients json.loads str responses and mangle JSON-like logs.
        # 400 means the container exists but has no log stream to read yet
        response = self._call(
            "read pod log",
            self.core_v1.read_namespaced_pod_log,
            name=log_request.pod_name,
            namespace=namespace,
            tail_lines=log_request.tail_lines,
            _preload_content=False,
            not_found_statuses=(400, 404),
        )
        try:
            return response.data.decode("utf-8", errors="replace")
        finally:
            response.release_conn()

    def create_pod(self, namespace: str, pod_info: PodInfo) -> Dict[str, Any]:
        """Submit a single-container pod and return the submitted manifest"""
        if not pod_info.name or not pod_info.name.strip():
            raise InvalidPodSpecError("pod name must not be empty")
        if not pod_info.image or not pod_info.image.strip():
            raise InvalidPodSpecError("pod image must not be empty")

        container: Dict[str, Any] = {
            "name": pod_info.name,
            "image": pod_info.image,
        }
        if pod_info.resource_requirements:
            resources = pod_info.resource_requirements.to_manifest()
            if resources:
                container["resources"] = resources

        manifest = {
            "apiVersion": "v1",
            "kind": "Pod",
            "metadata": {"name": pod_info.name},
            "spec": {"containers": [container]},
        }

        logger.info("Creating pod %s/%s from image %s", namespace, pod_info.name, pod_info.image)
        created = self._call(
            "create pod", self.core_v1.create_namespaced_pod, namespace=namespace, body=manifest
        )
        logger.info("Created pod %s/%s (uid=%s)", namespace, pod_info.name,
                    getattr(getattr(created, "metadata", None), "uid", None))
        return manifest

    def stop_pod(self, namespace: str, pod_name: str) -> None:
        """Request deletion of a pod; returns once the API has accepted it"""
        self._call(
            "delete pod", self.core_v1.delete_namespaced_pod, name=pod_name, namespace=namespace
        )
        logger.info("Deletion of pod %s/%s accepted", namespace, pod_name)

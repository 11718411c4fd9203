import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from pod_gateway.api.deps import get_k8s_client
from pod_gateway.models.pod import PodInfo, PodLogRequest, PodStatus
from pod_gateway.models.response import BaseResponse
from pod_gateway.services.k8s_client import K8sClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{namespace}/pod", response_model=BaseResponse[Dict[str, Any]],
             summary="Create a pod")
async def create_pod(namespace: str, pod_info: PodInfo,
                     k8s_client: K8sClient = Depends(get_k8s_client)):
    """
    Create a single-container pod and return the submitted manifest
    """
    logger.info("create pod %s/%s", namespace, pod_info.name)
    pod = await run_in_threadpool(k8s_client.create_pod, namespace, pod_info)
    return BaseResponse.ok(pod)


@router.get("/{namespace}/{pod_name}/status", response_model=BaseResponse[PodStatus],
            summary="Get pod status")
async def query_pod_status(namespace: str, pod_name: str,
                           k8s_client: K8sClient = Depends(get_k8s_client)):
    """
    Get the phase and conditions of a pod
    """
    logger.info("query status %s/%s", namespace, pod_name)
    status = await run_in_threadpool(k8s_client.query_pod_status, namespace, pod_name)
    return BaseResponse.ok(status)


@router.get("/{namespace}/{pod_name}/logs", response_model=BaseResponse[str],
            summary="Get pod logs")
async def query_pod_logs(namespace: str, pod_name: str,
                         tail: int = Query(..., ge=0, description="Number of most recent lines"),
                         k8s_client: K8sClient = Depends(get_k8s_client)):
    """
    Get the most recent log lines of a pod
    """
    logger.info("query logs %s/%s tail=%d", namespace, pod_name, tail)
    log_request = PodLogRequest(pod_name=pod_name, tail_lines=tail)
    logs = await run_in_threadpool(k8s_client.query_pod_logs, namespace, log_request)
    return BaseResponse.ok(logs)


@router.delete("/{namespace}/{pod_name}", response_model=BaseResponse[Any],
               summary="Delete a pod")
async def stop_pod(namespace: str, pod_name: str,
                   k8s_client: K8sClient = Depends(get_k8s_client)):
    """
    Request deletion of a pod; termination happens asynchronously
    """
    logger.info("delete pod %s/%s", namespace, pod_name)
    await run_in_threadpool(k8s_client.stop_pod, namespace, pod_name)
    return BaseResponse.ok()

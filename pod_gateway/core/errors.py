"""
Error taxonomy surfaced by the Kubernetes adapter
"""
import json
from enum import Enum
from typing import Optional

from kubernetes.client.rest import ApiException


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    ALREADY_EXISTS = "AlreadyExists"
    INVALID_SPEC = "InvalidSpec"
    INCOMPLETE_STATUS = "IncompleteStatus"
    UPSTREAM_ERROR = "UpstreamError"


class PodGatewayError(Exception):
    """Base class for every failure the gateway reports to its callers.

    ``kind`` is the machine-readable discriminator sent on the wire and
    ``status_code`` is the HTTP status used when status code mapping is on.
    """

    kind: ErrorKind = ErrorKind.UPSTREAM_ERROR
    status_code: int = 502

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class PodNotFoundError(PodGatewayError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404


class PodAlreadyExistsError(PodGatewayError):
    kind = ErrorKind.ALREADY_EXISTS
    status_code = 409


class InvalidPodSpecError(PodGatewayError):
    kind = ErrorKind.INVALID_SPEC
    status_code = 400


class IncompletePodStatusError(PodGatewayError):
    kind = ErrorKind.INCOMPLETE_STATUS
    status_code = 502


class UpstreamError(PodGatewayError):
    kind = ErrorKind.UPSTREAM_ERROR
    status_code = 502


def api_exception_message(exc: ApiException) -> str:
    """Extract the human-readable message of a Kubernetes ``Status`` body."""
    if exc.body:
        try:
            body = json.loads(exc.body)
        except (TypeError, ValueError):
            body = None
        if isinstance(body, dict) and body.get("message"):
            return body["message"]
    return f"({exc.status}) {exc.reason}"


def from_api_exception(exc: ApiException, not_found_statuses=(404,)) -> PodGatewayError:
    """Map an ``ApiException`` to the matching gateway error by HTTP status"""
    message = api_exception_message(exc)
    status: Optional[int] = exc.status
    if status in not_found_statuses:
        return PodNotFoundError(message)
    if status == 409:
        return PodAlreadyExistsError(message)
    if status == 422:
        return InvalidPodSpecError(message)
    return UpstreamError(message)

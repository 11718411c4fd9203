"""
Uniform response envelope wrapped around every pod operation
"""
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from pod_gateway.core.errors import ErrorKind, PodGatewayError

D = TypeVar("D")


class BaseResponseCode(str, Enum):
    OK = "OK"
    FAIL = "FAIL"


class BaseResponse(BaseModel, Generic[D]):
    """OK/FAIL envelope; ``code`` is the authoritative discriminator"""
    code: BaseResponseCode
    data: Optional[D] = None
    err: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, data: Optional[D] = None) -> "BaseResponse[D]":
        return cls(code=BaseResponseCode.OK, data=data)

    @classmethod
    def fail(cls, error: PodGatewayError) -> "BaseResponse[D]":
        return cls(code=BaseResponseCode.FAIL, err=str(error), kind=error.kind)


__all__ = ["BaseResponseCode", "BaseResponse"]

import logging
import logging.config
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pod_gateway.api.routes import pods
from pod_gateway.core.config import settings
from pod_gateway.core.errors import InvalidPodSpecError, PodGatewayError, UpstreamError
from pod_gateway.core.logging_config import get_logging_config
from pod_gateway.models.response import BaseResponse
from pod_gateway.services.k8s_client import K8sClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.config.dictConfig(get_logging_config(settings.LOG_LEVEL))
    if app.state.k8s_client is None:
        logger.info("Connecting to the Kubernetes API")
        app.state.k8s_client = K8sClient()
    yield


def _envelope_response(error: PodGatewayError) -> JSONResponse:
    status_code = error.status_code if settings.ERROR_STATUS_CODES else 200
    return JSONResponse(
        status_code=status_code,
        content=BaseResponse.fail(error).model_dump(mode="json"),
    )


async def pod_gateway_error_handler(request: Request, exc: PodGatewayError):
    return _envelope_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.info("Rejected %s %s: %s", request.method, request.url.path, details)
    return _envelope_response(InvalidPodSpecError(details))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope_response(UpstreamError(str(exc)))


def create_app(k8s_client: Optional[K8sClient] = None) -> FastAPI:
    """Build the application; a prebuilt adapter skips Kubernetes config loading"""
    app = FastAPI(
        title=settings.APP_TITLE,
        description="HTTP gateway for creating, inspecting and deleting Kubernetes pods",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.k8s_client = k8s_client

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PodGatewayError, pod_gateway_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", tags=["Health"])
    async def health_check():
        """
        Health check endpoint
        """
        return {"status": "healthy"}

    # Include routers
    app.include_router(pods.router, tags=["Pods"])

    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT,
                log_config=get_logging_config(settings.LOG_LEVEL))


if __name__ == "__main__":
    run()

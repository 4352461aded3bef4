import uuid
from collections.abc import Sequence
from typing import Any

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator


def create_service_app(
    *,
    title: str,
    version: str = "0.1.0",
    description: str | None = None,
    enable_metrics: bool = True,
    metrics_endpoint: str = "/metrics",
    cors_allow_origins: Sequence[str] | None = ("*",),
    correlation_header_name: str = "X-Request-ID",
    **fastapi_kwargs: Any,
) -> FastAPI:
    """Build a FastAPI app with Prometheus metrics, CORS and request correlation ids.

    Extra keyword arguments (``lifespan``, ``docs_url`` ...) go straight to ``FastAPI``.
    """
    app = FastAPI(title=title, version=version, description=description, **fastapi_kwargs)

    if enable_metrics:
        Instrumentator().instrument(app).expose(app, endpoint=metrics_endpoint, include_in_schema=False)

    if cors_allow_origins is not None:
        allow_origins = list(cors_allow_origins)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_credentials=allow_origins != ["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_middleware(
        CorrelationIdMiddleware,
        header_name=correlation_header_name,
        generator=lambda: str(uuid.uuid4()),
        update_request_header=True,
    )

    return app

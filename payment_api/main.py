"""Payment Transaction Service.

HTTP API for authorizing, reversing and querying payment transactions.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from payment_api import __version__
from payment_api.api.routes import api_router
from payment_api.core.cache import create_cache
from payment_api.core.config import AppEnvironment, Settings, get_settings
from payment_api.core.database import reset_engine
from payment_api.core.errors import PaymentServiceError, get_status_code
from payment_api.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    setup_logging(settings)
    logger.info(
        "service_starting",
        app=settings.app.name,
        env=settings.app.env.value,
        version=__version__,
    )

    yield

    await reset_engine()
    logger.info("service_stopped")


async def payment_error_handler(request: Request, exc: PaymentServiceError) -> JSONResponse:
    """Map domain errors to their HTTP status, with details under ``errors``."""
    content: dict = {"detail": exc.message}
    if exc.details:
        content["errors"] = exc.details
    return JSONResponse(status_code=get_status_code(exc), content=content)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app() -> FastAPI:
    """Build the application and its process-wide response cache."""
    settings = get_settings()
    show_docs = settings.app.env != AppEnvironment.PROD

    app = FastAPI(
        title="Payment Transaction API",
        description="Authorize, reverse and query payment transactions.",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
        openapi_url="/openapi.json" if show_docs else None,
    )
    app.state.settings = settings
    app.state.cache = create_cache(settings.cache)

    security = settings.security
    app.add_middleware(
        CORSMiddleware,
        allow_origins=security.cors_allowed_origins,
        allow_credentials=security.cors_allow_credentials,
        allow_methods=security.cors_allow_methods,
        allow_headers=security.cors_allow_headers,
    )
    app.include_router(api_router, prefix=settings.app.api_prefix)
    app.add_exception_handler(PaymentServiceError, payment_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    setup_telemetry(app, settings)
    return app


def setup_telemetry(app: FastAPI, settings: Settings) -> None:
    """Export FastAPI spans over OTLP when an endpoint is configured."""
    observability = settings.observability
    if not observability.otlp_endpoint:
        return

    provider = TracerProvider(
        resource=Resource(attributes={SERVICE_NAME: observability.service_name})
    )
    provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(
                endpoint=observability.otlp_endpoint,
                insecure=observability.otlp_insecure,
            )
        )
    )
    trace.set_tracer_provider(provider)
    FastAPIInstrumentor.instrument_app(app)


def run() -> None:
    """Serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    local = settings.app.env == AppEnvironment.LOCAL
    workers = 1 if local else settings.server.workers

    if workers > 1 and settings.cache.enabled:
        # Each worker holds its own cache and never sees the others' writes
        logger.warning("cache_per_worker", workers=workers)

    uvicorn.run(
        "payment_api.main:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        reload=local,
        workers=workers,
        log_level=settings.app.log_level.value.lower(),
    )


if __name__ == "__main__":
    run()

"""FastAPI application for the unified search gateway."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from unified_search.config import Settings, get_settings
from unified_search.dependencies import get_search_service
from unified_search.exceptions import AuthenticationError, ConfigurationError, QueryValidationError
from unified_search.middleware.request_logging import RequestLoggingMiddleware
from unified_search.middleware.security import (
    SecurityHeadersMiddleware,
    build_limiter,
    rate_limit_exceeded_handler,
    rate_limit_for,
    require_api_key,
)
from unified_search.models import (
    ClientErrorResponse,
    HealthResponse,
    SearchResponse,
    ServerErrorResponse,
    SourceStatus,
)
from unified_search.services.search import UnifiedSearchService
from unified_search.sources import build_adapters
from unified_search.utils.logging import get_logger, setup_logging
from unified_search.utils.timefmt import iso_timestamp
from unified_search.utils.validators import validate_search_payload

logger = get_logger(__name__)

SERVICE_ERROR = "Unified search service error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json, settings.log_file)
    logger.info(
        f"{settings.app_title} started on port {settings.port} "
        f"(environment={settings.environment}, zendesk={settings.zendesk_subdomain or 'NOT_CONFIGURED'}, "
        f"docs={settings.docs_base_url})"
    )
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API. An explicit ``settings`` also backs the route dependencies."""
    explicit = settings is not None
    settings = settings or get_settings()
    if not settings.api_key:
        raise ConfigurationError("API_KEY is not configured. Please set it in .env")

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        description="Unified search across help center, documentation and knowledge base",
        lifespan=lifespan,
    )

    if explicit:
        bound_settings = settings
        bound_service = UnifiedSearchService(build_adapters(bound_settings))
        app.dependency_overrides[get_settings] = lambda: bound_settings
        app.dependency_overrides[get_search_service] = lambda: bound_service

    limiter = build_limiter()
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Last added runs first: request logging wraps everything
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(QueryValidationError)
    async def query_validation_handler(request: Request, exc: QueryValidationError):
        logger.warning(f"Rejected search request: {exc.message}", extra={"endpoint": request.url.path})
        return JSONResponse(
            status_code=400,
            content=ClientErrorResponse(error=exc.message, query=exc.query).model_dump(),
        )

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(request: Request, exc: AuthenticationError):
        return JSONResponse(status_code=401, content={"success": False, "error": exc.message})

    @app.post(
        "/api/search/unified",
        response_model=SearchResponse,
        dependencies=[Depends(require_api_key)],
    )
    @limiter.limit(rate_limit_for(settings))
    async def unified_search(
        request: Request,
        service: UnifiedSearchService = Depends(get_search_service),
        settings: Settings = Depends(get_settings),
    ):
        """Search every requested source and return one ranked list."""
        try:
            payload: Any = await request.json()
        except ValueError:
            payload = None

        search_request = validate_search_payload(payload)

        try:
            return await service.search(search_request)
        except Exception as e:
            logger.exception(f"Unified search error: {e}", extra={"query": search_request.query[:100]})
            body = ServerErrorResponse(
                error=SERVICE_ERROR,
                details="Internal server error" if settings.is_production else str(e),
                timestamp=iso_timestamp(),
            )
            return JSONResponse(status_code=500, content=body.model_dump())

    @app.get("/health", response_model=HealthResponse)
    async def health_check(settings: Settings = Depends(get_settings)):
        """Health check endpoint."""
        return HealthResponse(
            service=settings.service_name,
            version=settings.app_version,
            timestamp=iso_timestamp(),
            sources=SourceStatus(
                zendesk=settings.zendesk_configured,
                docs=True,
                knowledge_base=True,
            ),
        )

    @app.get("/")
    async def root(settings: Settings = Depends(get_settings)):
        return {
            "service": settings.app_title,
            "version": settings.app_version,
            "status": "Running",
            "endpoints": [
                "POST /api/search/unified - Unified search across all sources",
                "GET /health - Health check",
            ],
            "authentication": "Bearer token required for /api/ endpoints",
        }

    return app


app = create_app()

"""FastAPI application entrypoint for the KGYM API.

All service routers are mounted in-process under ``/api/v1``.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from libs.common.config import get_settings
from libs.common.error_handler import add_exception_handlers
from libs.common.logging import get_logger
from libs.common.middleware import add_observability_middleware
from libs.common.rate_limit import limiter, rate_limit_exceeded_handler
from services.attendance_service.routers import checkins_router
from services.attendance_service.routers import me_router as attendance_me_router
from services.gateway_service.app.routers.dashboard import router as dashboard_router
from services.gateway_service.app.routers.reports import router as reports_router
from services.members_service.routers import (
    auth_router,
    profile_router,
    students_router,
)
from services.plans_service.routers import me_router as plans_me_router
from services.plans_service.routers import plans_router, student_plans_router
from services.workouts_service.routers import me_router as workouts_me_router
from services.workouts_service.routers import sheets_router

API_PREFIX = "/api/v1"

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = get_settings()
    app = FastAPI(
        title="KGYM API",
        version="0.1.0",
        description="Gym management API: students, plans, check-ins and workouts.",
    )

    # Add rate limiter state to app
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability (structured logging + request tracing)
    add_observability_middleware(app)

    # Add global exception handlers for consistent error responses
    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple readiness endpoint."""
        return {"status": "ok"}

    for router in (
        auth_router,
        profile_router,
        students_router,
        plans_router,
        student_plans_router,
        plans_me_router,
        checkins_router,
        attendance_me_router,
        sheets_router,
        workouts_me_router,
        dashboard_router,
        reports_router,
    ):
        app.include_router(router, prefix=API_PREFIX)

    if settings.STUDENT_PASSWORD_SCHEME == "cpf_prefix":
        logger.warning(
            "STUDENT_PASSWORD_SCHEME=cpf_prefix: student passwords are the first "
            "six CPF digits. Set STUDENT_PASSWORD_SCHEME=random to issue random "
            "passwords with a reset e-mail instead."
        )

    return app


app = create_app()

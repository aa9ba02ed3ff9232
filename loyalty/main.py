import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from loyalty import __version__
from loyalty.core.config import Settings, get_settings
from loyalty.core.logging import configure_logging
from loyalty.infrastructure.database.session import init_db, reset_engine
from loyalty.interfaces.http.routers import create_api_router
from loyalty.schemas import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    configure_logging(settings)
    if settings.environment in {"development", "test"}:
        await init_db()
    logger.info("%s %s started (%s)", settings.project_name, __version__, settings.environment)
    yield
    await reset_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.project_name,
        description="Loyalty points accounts and two-phase point transfers",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__)

    return app


app = create_app()

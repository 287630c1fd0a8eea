import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from impactapi.core.database import engine, init_db
from impactapi.core.settings import settings
from impactapi.domains.impact_models.routes import router as impact_models_router
from impactapi.domains.indicators.routes import router as indicators_router
from impactapi.domains.organizations.routes import router as organizations_router
from impactapi.domains.outcomes.routes import router as outcomes_router
from impactapi.domains.themes.routes import router as themes_router
from impactapi.domains.users.routes import router as users_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    await init_db()
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="Impact Tracker API",
    description="API for social-impact measurement data",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL] if settings.FRONTEND_URL else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(users_router, prefix="/api/v1")
app.include_router(organizations_router, prefix="/api/v1")
app.include_router(indicators_router, prefix="/api/v1")
app.include_router(outcomes_router, prefix="/api/v1")
app.include_router(impact_models_router, prefix="/api/v1")
app.include_router(themes_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": "Impact Tracker API is running"}


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}

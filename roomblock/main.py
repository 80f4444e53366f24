"""RoomBlock Attrition — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roomblock.api.errors import OperationFailed, operation_failed_handler
from roomblock.api.v1.attrition import router as attrition_router
from roomblock.api.v1.properties import router as properties_router
from roomblock.api.v1.room_blocks import router as room_blocks_router
from roomblock.config import settings

# Configure root logger so all roomblock.* loggers output to stderr.
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    from roomblock.database import async_session_factory, engine
    from roomblock.services import property_registry

    # Startup: seed the registry admin so that reads never have to
    async with async_session_factory() as session:
        admin = await property_registry.ensure_admin(session)
        await session.commit()
    logging.getLogger(__name__).info("Registry admin: %s", admin)

    yield
    # Shutdown: dispose engine connections
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Hotel room-block reservations and attrition penalties for event organisers.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(OperationFailed, operation_failed_handler)

# Routers
app.include_router(properties_router)
app.include_router(room_blocks_router)
app.include_router(attrition_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("roomblock.main:app", host=settings.host, port=settings.port, reload=settings.debug)

"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from user_sync import __version__
from user_sync.config import get_settings
from user_sync.database import create_datastore, get_datastore
from user_sync.datastore import BaseDatastore
from user_sync.api import api_router
from user_sync.exceptions import ServiceError
from user_sync.schemas.user import HealthResponse

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    if not settings.supabase_url:
        logger.error("SUPABASE_URL is not set, the Supabase client cannot be created")
    if not settings.api_key:
        logger.warning("API_KEY is not set, every request will be rejected")
    app.state.datastore = await create_datastore(settings)
    logger.info("Server running on port %s", settings.port)
    yield
    # Shutdown
    await app.state.datastore.aclose()


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description="Stores user profiles and login history in Supabase",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Render service errors as {success: false, error, details}."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Include API routes
app.include_router(api_router)


@app.get("/health", response_model=HealthResponse)
async def health_check(db: BaseDatastore = Depends(get_datastore)):
    """Health check endpoint."""
    connected, message, latency = await db.ping()
    return {
        "status": "healthy" if connected else "degraded",
        "app": settings.app_name,
        "datastore": {"connected": connected, "message": message, "latency_ms": latency},
    }


def run():
    """Run the API server with uvicorn."""
    import uvicorn
    uvicorn.run("user_sync.main:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    run()

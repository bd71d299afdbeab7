import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request

from file_upload_api.api import files, health
from file_upload_api.api.error_handlers import register_exception_handlers
from file_upload_api.application.interfaces.di_container import DIContainer
from shared.utils.logging_config import get_logger, setup_logging
from shared.config.settings import Settings, settings

setup_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        log_to_console=settings.log_to_console
    )

logger = get_logger(__name__)


def create_app(app_settings: Settings = None) -> FastAPI:
    """Build the application. The store handle lives from lifespan startup to shutdown."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(f"Starting {app_settings.api_title} in {app_settings.environment} environment...")
        logger.info(f"Storage mode: {app_settings.storage_mode}, repository: {app_settings.repository_type}")
        if app_settings.repository_type != "in_memory":
            logger.info(f"Collection: {app_settings.files_collection_name}")

        container = DIContainer(app_settings)
        app.state.container = container

        yield

        # Shutdown
        await container.close()
        logger.info(f"Shutting down {app_settings.api_title}...")

    app = FastAPI(
        title=app_settings.api_title,
        description=app_settings.api_description,
        version=app_settings.api_version,
        debug=app_settings.debug,
        lifespan=lifespan
    )

    # Middleware for request logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        logger.info(f"Request: {request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"Response: {request.method} {request.url.path} "
            f"Status: {response.status_code} "
            f"Duration: {process_time:.3f}s"
        )
        return response

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(files.router, tags=["files"])

    return app


app = create_app()

def run_production():
    """Entry point for the CLI script."""
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.port)

if __name__ == "__main__":
    run_production()

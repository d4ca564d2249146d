from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from framework.config import settings
from framework.database.manager import DatabaseManager
from framework.middleware.logging_md import LoggingMiddleware
from framework.logging.logger import LogConfig
from framework.exceptions.handler import BusinessException, global_exception_handler
from apps.catalog.api.router import router as catalog_router

@asynccontextmanager
async def lifespan(app: FastAPI):
    driver = DatabaseManager.get_instance().sql
    await driver.connect()
    if settings.DB_CREATE_TABLES:
        await driver.create_all()
        logger.info("Database tables created")
    logger.info(f"{settings.APP_NAME} started ({settings.APP_ENV})")
    yield
    await driver.disconnect()

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Initialize logging configuration
LogConfig.setup_logging(log_to_files=settings.APP_ENV != "testing")

# Register global exception handlers
app.add_exception_handler(BusinessException, global_exception_handler)
app.add_exception_handler(RequestValidationError, global_exception_handler)
app.add_exception_handler(SQLAlchemyError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(LoggingMiddleware)

app.include_router(
    catalog_router,
    prefix=settings.API_V1_PRODUCTS_PREFIX,
    tags=["Catalog"]
)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

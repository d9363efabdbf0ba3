from fastapi import FastAPI, HTTPException
from contextlib import asynccontextmanager
import logging
from src.config import Config
from src.db.main import init_db, engine

from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from src.customers.routes import customer_router
from src.films.routes import film_router
from src.rentals.routes import rental_router
from src.utils.limiter import limiter
from src.utils.logging_config import setup_logging
from src.utils.errors import (
    custom_http_exception_handler, custom_validation_exception_handler,
    rate_limit_exception_handler, database_exception_handler,
)


setup_logging(Config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("---Server Started---")

    if Config.CREATE_TABLES_ON_STARTUP:
        await init_db()

    yield

    # Release pooled connections on shutdown
    logger.info("---Closing Database Connections---")
    await engine.dispose()
    logger.info("---Server Closed---")

app = FastAPI(
    title="Rental Store API",
    description="Read access and rental reports for the rental store's customers, films and rentals",
    lifespan = lifespan
)

# Required for SlowAPI to function correctly on routes
app.state.limiter = limiter

from fastapi.middleware.cors import CORSMiddleware

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

@app.get("/")
def health_check():
    return{
        "status": "Success",
        "message": "Server Working"
    }

app.add_exception_handler(HTTPException, custom_http_exception_handler)
app.add_exception_handler(RequestValidationError, custom_validation_exception_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
app.add_exception_handler(SQLAlchemyError, database_exception_handler)

# Register all routers
app.include_router(customer_router, prefix="/api/customers", tags=["Customers"])
app.include_router(film_router, prefix="/api/films", tags=["Films"])
app.include_router(rental_router, prefix="/api/rentals", tags=["Rentals"])

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import models
from .auth import TokenSettings
from .config import Settings, settings
from .database import engine
from .routers import auth_router, property_router, booking_router

# Set up a logger
logger = logging.getLogger("hotel_booking")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    logger.info("Hotel booking service starting up...")
    # Alembic owns the schema in deployed databases; this covers fresh local ones
    models.Base.metadata.create_all(bind=engine)
    yield
    logger.info("Hotel booking service shutting down...")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request body", "errors": jsonable_encoder(exc.errors())},
    )


def create_app(app_settings: Settings) -> FastAPI:
    logging.basicConfig(level=app_settings.LOG_LEVEL.upper(), format=LOG_FORMAT)

    app = FastAPI(
        title="Hotel Booking API",
        description="Accounts, property catalog, room search and multi-room bookings.",
        version="1.0.0",
        lifespan=lifespan
    )
    # Signing material is fixed at process start and read by the auth dependencies
    app.state.token_settings = TokenSettings.from_settings(app_settings)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(auth_router.router)
    app.include_router(property_router.router)
    app.include_router(booking_router.router)

    @app.get("/")
    def read_root():
        return {"message": "Welcome to the Hotel Booking API"}

    return app


app = create_app(settings)


def run():
    logger.info(f"Server running on port {settings.PORT}...")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

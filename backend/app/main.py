import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from app.dependencies.services import get_transactions
from app.routes import customers_router, points_router
from app.routes.errors import error_payload
from app.services.errors import ServiceError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler - runs on startup and shutdown"""
    # Startup: warm the transaction cache so the first request is fast
    try:
        get_transactions()
    except ServiceError as exc:
        logger.error("Transaction data unavailable at startup: %s", exc)
    yield
    # Shutdown


app = FastAPI(
    title="Retailer Rewards API",
    version="0.1.0",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):  # type: ignore[override]
    """Handle validation errors with HTTP 400 to keep a single error envelope."""
    return JSONResponse(
        status_code=400,
        content={
            "detail": error_payload(
                "VALIDATION_ERROR",
                "Invalid request parameters.",
                {
                    "errors": [
                        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                        for err in exc.errors()
                    ]
                },
            )
        },
    )


@app.exception_handler(ServiceError)
async def service_exception_handler(request, exc: ServiceError):  # type: ignore[override]
    """Service errors raised outside a route body, e.g. while loading data."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": error_payload(exc.code, exc.message, exc.details)},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):  # type: ignore[override]
    """Handle general exceptions - log and return 500 error"""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "detail": error_payload(
                "INTERNAL_SERVER_ERROR",
                "Internal server error.",
                {},
            )
        },
    )


# Register routers
app.include_router(customers_router)
app.include_router(points_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

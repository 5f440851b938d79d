import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .domain.datasheets.router import router as datasheets_router
from .domain.invoices.router import router as invoices_router
from .domain.payments.router import router as payments_router
from .domain.photos.router import router as photos_router
from .domain.products.router import router as products_router
from .domain.quotations.router import router as quotations_router
from .exceptions import DesertSolutionsError
from .security_headers import SecurityHeadersMiddleware

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("botocore").setLevel(logging.WARNING)
logging.getLogger("boto3").setLevel(logging.WARNING)

API_PREFIX = "/api/desert-solutions"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    if not config.DESERT_SOLUTIONS_API_KEYS:
        logger.warning("DESERT_SOLUTIONS_API_KEYS not set - all secured endpoints will reject requests")
    if not config.MERCURY_WEBHOOK_SECRET:
        logger.warning("MERCURY_WEBHOOK_SECRET not set - payment webhooks cannot be verified")
    if not config.RESEND_API_KEY:
        logger.warning("RESEND_API_KEY not set - email delivery is disabled")
    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Desert Solutions API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(DesertSolutionsError)
async def desert_solutions_exception_handler(request: Request, exc: DesertSolutionsError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Validation failures are reported as 400 with the pydantic error details"""
    errors = exc.errors()
    is_query_error = any(error.get("loc", ("",))[0] == "query" for error in errors)
    label = "Invalid query parameters" if is_query_error else "Invalid request data"

    logger.warning(f"Validation error for {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content={"error": label, "details": jsonable_encoder(errors)},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


if config.SECURITY_HEADERS_ENABLED:
    app.add_middleware(SecurityHeadersMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"])
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

# Log CORS configuration for debugging
logger.info(f"CORS allowed origins: {config.ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(products_router, prefix=API_PREFIX)
app.include_router(photos_router, prefix=API_PREFIX)
app.include_router(quotations_router, prefix=API_PREFIX)
app.include_router(datasheets_router, prefix=API_PREFIX)
app.include_router(invoices_router, prefix=API_PREFIX)
app.include_router(payments_router, prefix=API_PREFIX)


@app.get("/health")
async def health():
    return {"status": "healthy"}

# product_api/app/main.py

"""
FastAPI Product API.
Lists, creates, updates, toggles the availability of and deletes products.
Database models, Pydantic schemas, request validation and routes live in
their own modules; this one wires them into the application.
"""
import os
import logging
import sys
import time

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

from .db import Base, engine
from .products import router as products_router
from .validation import validation_exception_handler

# -----------------------------
# Configure Logging
# -----------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

# Load environment variables
DB_CONNECT_RETRIES = int(os.getenv("DB_CONNECT_RETRIES", "10"))
DB_CONNECT_RETRY_DELAY = float(os.getenv("DB_CONNECT_RETRY_DELAY", "5"))
SERVE_DOCS = os.getenv("SERVE_DOCS", "true").strip().lower() in ("1", "true", "yes")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

if SERVE_DOCS:
    logger.info("Product API: documentation served at /docs and /redoc.")
else:
    logger.info("Product API: documentation disabled (SERVE_DOCS).")


# -----------------------------
# FastAPI App Initialization
# -----------------------------
app = FastAPI(
    title="Product API",
    description="REST API for managing products: name, price and availability",
    version="1.0.0",
    docs_url="/docs" if SERVE_DOCS else None,
    redoc_url="/redoc" if SERVE_DOCS else None,
    openapi_url="/openapi.json" if SERVE_DOCS else None,
    openapi_tags=[{"name": "Products", "description": "Product management"}],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.include_router(products_router)


# --- FastAPI Event Handlers ---
@app.on_event("startup")
async def startup_event():
    """
    Ensures database tables exist, retrying while the database comes up.
    """
    for i in range(DB_CONNECT_RETRIES):
        try:
            logger.info(
                f"Attempting to connect to the database and create tables (attempt {i+1}/{DB_CONNECT_RETRIES})..."
            )
            Base.metadata.create_all(bind=engine)
            logger.info("Successfully connected to the database and ensured tables exist.")
            break
        except OperationalError as e:
            logger.warning(f"Failed to connect to the database: {e}")
            if i < DB_CONNECT_RETRIES - 1:
                logger.info(f"Retrying in {DB_CONNECT_RETRY_DELAY} seconds...")
                time.sleep(DB_CONNECT_RETRY_DELAY)
            else:
                logger.critical(
                    f"Failed to connect to the database after {DB_CONNECT_RETRIES} attempts. Exiting application."
                )
                sys.exit(1)
        except Exception as e:
            logger.critical(
                f"An unexpected error occurred during database startup: {e}",
                exc_info=True,
            )
            sys.exit(1)


# --- Health Check Endpoint ---
@app.get("/health", status_code=status.HTTP_200_OK, summary="Health check endpoint")
async def health_check():
    """
    Returns 200 OK if the service is alive.
    """
    return {"status": "ok", "service": "product-service"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )

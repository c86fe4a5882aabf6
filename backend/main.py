from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn
import structlog
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from core.config import settings
from core.errors import StockError
from core.logging import configure_logging
from db.database import create_db_and_tables, engine
from routers.beers import router as beers_router, error_detail
from schemas.validation import field_errors_from

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await create_db_and_tables()
    logger.info("beer_stock_started", api_prefix=settings.api_prefix)
    yield
    await engine.dispose()


app = FastAPI(
    title="Beer Stock API",
    description="API for managing beer stock",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed path params or bodies are input errors (400), same shape as explicit validation."""
    error = StockError.invalid_input(field_errors_from(exc))
    logger.warning("request_rejected", path=request.url.path, kind=error.kind.value)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": error_detail(error)})


@app.get("/")
def root():
    """Health check endpoint to confirm the service is operational."""
    return {"message": "Beer stock service is running"}


# Beer stock routes
app.include_router(beers_router, prefix=f"{settings.api_prefix}/beers", tags=["beers"])

if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=True)

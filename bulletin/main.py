import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bulletin.config import settings
from bulletin.database import engine
from bulletin.exceptions import DomainError, InternalServerError
from bulletin.routers import articles

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Shutdown
    await engine.dispose()

app = FastAPI(
    title="Bulletin - Article API",
    description="Cursor-paginated articles enriched with their authors",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    if isinstance(exc, InternalServerError):
        logger.error("%s %s failed: %r", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

# Routers
app.include_router(articles.router)

@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}

# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Dict

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.middleware.base import BaseHTTPMiddleware

from . import config
from .db import init_db
from .logging_config import request_id_var, setup_logging
from .rate_limit import limiter
from .routes import (
    admin_imports_router,
    admin_menu_router,
    admin_par_levels_router,
    admin_prep_lists_router,
    admin_recipes_router,
    admin_sales_router,
    prep_lists_router,
)

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Prep Kitchen API started")
    yield


app = FastAPI(
    title="Prep Kitchen API",
    description="Back-of-house item reconciliation and daily prep lists",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Admin - Menu Items", "description": "Menu item catalog"},
        {"name": "Admin - Recipes", "description": "Recipe cards"},
        {"name": "Admin - Par Levels", "description": "Par levels and par sheet import"},
        {"name": "Admin - Sales", "description": "Sales report import"},
        {"name": "Admin - Imports", "description": "Document analysis and batch import"},
        {"name": "Admin - Prep Lists", "description": "Prep list generation"},
        {"name": "Prep Lists", "description": "Kitchen prep list view"},
    ],
)


# ---------- Request ID Middleware ----------
# Adds a unique request ID to each request for log correlation

class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add rate limit exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=409, content={"detail": "Conflicts with an existing record"})


# ---------- Health ----------

@app.get("/health", tags=["Health"])
def health() -> Dict[str, str]:
    """Health check endpoint. Returns ok if the service is running."""
    return {"status": "ok"}


# ---------- API v1 ----------

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(admin_menu_router)
api_v1_router.include_router(admin_recipes_router)
api_v1_router.include_router(admin_par_levels_router)
api_v1_router.include_router(admin_sales_router)
api_v1_router.include_router(admin_imports_router)
api_v1_router.include_router(admin_prep_lists_router)
api_v1_router.include_router(prep_lists_router)

app.include_router(api_v1_router)

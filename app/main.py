import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import get_settings
from app.database import init_db
from app.errors import ProgressError, Unauthenticated
from app.routers import leaderboard, stats, submissions

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema is prepared once here, never on the request path
    init_db()
    yield


app = FastAPI(title="Study Companion Progress API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ProgressError)
async def progress_error_handler(request: Request, exc: ProgressError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(p) for p in err["loc"][1:]) or str(err["loc"][0]) for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"detail": "Missing or invalid fields", "fields": fields},
    )


app.include_router(stats.router)
app.include_router(submissions.router)
app.include_router(leaderboard.router)


@app.get("/")
def root():
    return {"message": "Study Companion Progress API", "docs": "/docs"}

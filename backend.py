import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from roundscore.config import FRONTEND_URL, LOG_LEVEL
from roundscore.database import init_db
from roundscore.routers import (
    templates_router,
    interviews_router,
    question_banks_router,
    scoring_router,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database initialised")
    yield


app = FastAPI(title="RoundScore API", lifespan=lifespan)

# Include routers
app.include_router(templates_router)
app.include_router(interviews_router)
app.include_router(question_banks_router)
app.include_router(scoring_router)


def _strip_trailing_slash(value: str) -> str:
    return value[:-1] if value.endswith("/") else value


allowed_origins = [
    _strip_trailing_slash(FRONTEND_URL),
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "detail": "A database error occurred, please try again"},
    )


@app.get("/")
async def root():
    return {"status": "ok", "service": "RoundScore API"}

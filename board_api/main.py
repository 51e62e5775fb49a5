import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from board_api import __version__
from board_api.api import auth, boards
from board_api.config import DEFAULT_SECRET_KEY, get_settings
from board_api.database import create_db_and_tables
from board_api.errors import AuthenticationRequired, ErrorCode, error_response, failure_response
from board_api.observability import setup_logging

logger = logging.getLogger(__name__)

MSG_INVALID_INPUT = "Invalid input data."
MSG_UNEXPECTED = "An unexpected error occurred."


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if settings.secret_key == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is not set; tokens are signed with the default key")
    create_db_and_tables()
    logger.info("Board API started")
    yield
    logger.info("Board API shutting down")


app = FastAPI(title="Board API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"ok": True}


# Routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(boards.router, prefix="/api/board", tags=["board"])


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(
        f"Validation error on {request.url.path}: {exc.errors()}",
        extra={"path": request.url.path},
    )
    return error_response(ErrorCode.VALIDATION_FAILED, MSG_INVALID_INPUT)


@app.exception_handler(AuthenticationRequired)
async def authentication_error_handler(request: Request, exc: AuthenticationRequired):
    return error_response(
        ErrorCode.UNAUTHORIZED, exc.message, headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return failure_response(exc.status_code, str(exc.detail), headers=exc.headers)


@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    return error_response(ErrorCode.INTERNAL_FAILURE, MSG_UNEXPECTED)

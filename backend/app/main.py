import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings, require_jwt_secret
from app.core.log_config import configure_logging
from app.routes.auth import router as auth_router

configure_logging()
logger = logging.getLogger(__name__)

require_jwt_secret()

app = FastAPI(
    title="Expense Tracker Auth",
    docs_url=None if settings.is_prod else "/docs",
    redoc_url=None if settings.is_prod else "/redoc",
)
logger.info(
    "Startup config: ENV=%s token_ttl_minutes=%s cors_origins=%s",
    settings.ENV,
    settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    len(settings.CORS_ORIGINS),
)

_ERROR_CODE_BY_STATUS: dict[int, str] = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_ERROR",
}


def _error_code(status_code: int) -> str:
    return _ERROR_CODE_BY_STATUS.get(int(status_code), "HTTP_ERROR")


@app.exception_handler(HTTPException)
def http_exception_handler(request: Request, exc: HTTPException):  # noqa: ARG001
    detail = exc.detail
    message = detail if isinstance(detail, str) and detail else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": _error_code(exc.status_code), "message": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError):  # noqa: ARG001
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Invalid request payload",
            "details": {"errors": jsonable_errors(exc)},
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may carry exception instances that JSONResponse can't encode
    out: list[dict] = []
    for err in exc.errors():
        item = {k: v for k, v in err.items() if k != "ctx"}
        out.append(item)
    return out


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)

@app.get("/health")
def health_check():
    return {"status": "ok"}

import logging
import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from .config import settings
from .logging_setup import configure_logging
from .routes.commands import router as commands_router
from .routes.interactions import router as interactions_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Chat interactions endpoint reporting LibJS test262 and Wasm spec test results.",
    docs_url=None,
    redoc_url=None,
)


@app.middleware("http")
async def log_interaction_timings(request: Request, call_next):
    if request.url.path != "/interactions":
        return await call_next(request)

    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = max(1, int((time.perf_counter() - started) * 1000))
        logger.info("%s %s -> %d in %dms", request.method, request.url.path, status_code, elapsed_ms)


app.include_router(interactions_router)
app.include_router(commands_router)


@app.on_event("startup")
def startup() -> None:
    configure_logging()
    logger.info("%s starting (%s)", settings.app_name, settings.app_env)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(_: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation failed",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/openapi.json")

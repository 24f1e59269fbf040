import os
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from signage_lite.config import CORS_ORIGINS, LOG_LEVEL, QUIET_ACCESS_LOG, SERVER_HOST, SERVER_PORT, STATIC_DIR
from signage_lite.db import Base, engine, ensure_sqlite_schema
from signage_lite.api import device, device_feed, media, player, playlist, tenant
from signage_lite.services.errors import SignageError

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if QUIET_ACCESS_LOG:
    # Devices poll constantly; keep warning/error lines only.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

Base.metadata.create_all(bind=engine)
ensure_sqlite_schema()

app = FastAPI(title="signage-lite")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query")]
    field = ".".join(location)
    message = first.get("msg", "invalid value")
    return f"{field}: {message}" if field else message


@app.exception_handler(SignageError)
async def signage_error_handler(request: Request, exc: SignageError):
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": _validation_message(exc)}, status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)


@app.middleware("http")
async def internal_error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error in %s %s", request.method, request.url.path)
        return JSONResponse({"error": "Internal server error"}, status_code=500)


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Signage-lite backend is running. Use /health or the /api routes."


@app.get("/health")
def health():
    return {"status": "ok", "message": "Signage-lite backend is running"}


app.include_router(device.router)
app.include_router(device_feed.router)
app.include_router(player.router)
app.include_router(tenant.router)
app.include_router(media.router)
app.include_router(playlist.router)

if STATIC_DIR and os.path.isdir(STATIC_DIR):
    app.mount("/", StaticFiles(directory=STATIC_DIR), name="static")


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)


if __name__ == "__main__":
    run()

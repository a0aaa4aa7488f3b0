# main.py
import routes
from contextlib import asynccontextmanager
from util.enums import Environment, Color
from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.cache import close_rate_limiter, init_rate_limiter
from config.http_client import close_http_client
from fastapi.responses import JSONResponse
from model.api import ErrorResponse
from service.archive_tracker import archive_tracker
from util.constants import InternalURIs
from util.errors import AppError
from util.logger import init_logger


async def _real_ip(request: Request) -> str:
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    try:
        init_logger()
        print(f"{Color.GREEN}Initializing...{Color.RESET}")
        await init_rate_limiter(_real_ip)
        print(f"{Color.BLUE}Server Started{Color.RESET}")
    except Exception as e:
        print("Failed to connect to Redis:", e)
        raise

    try:
        yield
    finally:
        try:
            await archive_tracker.drain(settings.ARCHIVE_DRAIN_SECONDS)
        except Exception as e:
            print("Error draining archive uploads:", e)
        try:
            await close_http_client()
            await close_rate_limiter()
        except Exception as e:
            print("Error closing clients:", e)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=settings.ALLOWED_ORIGIN != "*",
    allow_methods=["GET"],
    allow_headers=["Content-Type", "Accept"],
)


@app.get(InternalURIs.HEALTHZ)
async def healthz():
    return {"ok": True}


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.code, message=str(exc.detail)).model_dump(),
    )


@app.exception_handler(429)
async def ratelimit_handler(request: Request, exc):
    return JSONResponse(
        status_code=429,
        content={
            "ok": False,
            "error": "rate_limited",
            "message": f"Too many requests. Try again in {settings.RATE_LIMIT_SECONDS}s.",
        },
        headers={"Retry-After": str(settings.RATE_LIMIT_SECONDS)},
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=reload)

from contextlib import asynccontextmanager
import getpass
import logging

import asyncpg
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import security
from blog import router as blog_router
from catalog import router as catalog_router
from content_api import router as content_api_router
from core import db, settings
from core.templating import redirect_to_error
from core.weblog import weblog
from pages import router as pages_router
from purchases import router as purchases_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    # Initialize the DB pool once per process.
    await db.init_pool()
    logger.info("startup views=%s products=%s", settings.views_dir(), settings.products_dir())
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Focus Centric", lifespan=lifespan)

app.middleware("http")(weblog)

# Static assets (css, js, images) referenced by the templates.
app.mount(
    "/content",
    StaticFiles(directory=settings.content_dir(), check_dir=False),
    name="content",
)

app.include_router(content_api_router.router, tags=["api"])
app.include_router(catalog_router.router, tags=["catalog"])
app.include_router(blog_router.router, tags=["blog"])
app.include_router(purchases_router.router, tags=["purchases"])
app.include_router(pages_router.router, tags=["pages"])


def _is_api(request: Request) -> bool:
    return request.url.path == "/api" or request.url.path.startswith("/api/")


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
    if _is_api(request):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
    if _is_api(request):
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
            for err in errors
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": message or "Invalid request."},
        )
    return await request_validation_exception_handler(request, exc)


@app.exception_handler(asyncpg.PostgresError)
async def handle_database_error(request: Request, exc: asyncpg.PostgresError) -> Response:
    logger.error("database_error path=%s error=%r", request.url.path, exc)
    if _is_api(request):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Database error."},
        )
    return redirect_to_error()


@app.get("/health", include_in_schema=False)
def health() -> dict:
    return {"status": "ok"}


def run() -> None:
    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=settings.http_port(), log_config=None)


def hash_key() -> None:
    """
    Prompt for a content API key and print the bcrypt hash to put in API_KEY_HASH.
    """
    plain_key = getpass.getpass("API key: ")
    print(security.hash_api_key(plain_key))


if __name__ == "__main__":
    run()

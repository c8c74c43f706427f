import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shareregistry.config import Settings, settings as default_settings
from shareregistry.db.session import init_db, make_engine, make_session_factory
from shareregistry.errors import NotFoundError, ValidationError
from shareregistry.auth.routes import router as auth_router
from shareregistry.companies.routes import router as companies_router
from shareregistry.shareholders.routes import router as shareholders_router
from shareregistry.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
UNEXPECTED_ERROR = "Unexpected error occurred. Please try again later."


def _describe_request_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=exc.status_code, content={"errors": exc.errors})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [_describe_request_error(e) for e in exc.errors()]
        return JSONResponse(status_code=400, content={"errors": errors})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
        return JSONResponse(status_code=409, content={"error": "The operation conflicts with existing data."})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": UNEXPECTED_ERROR})


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or default_settings
    if not app_settings.secret_key or not app_settings.secret_key.strip():
        raise RuntimeError("JWT_SECRET must be set; refusing to start without a token signing secret.")

    configure_logging(app_settings.log_level.upper())

    app = FastAPI(title=app_settings.app_name)

    engine = make_engine(app_settings.database_url)
    app.state.settings = app_settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(companies_router, prefix=API_PREFIX)
    app.include_router(shareholders_router, prefix=API_PREFIX)

    @app.get(API_PREFIX + "/health", tags=["system"])
    def health():
        return {"status": "ok"}

    @app.api_route(
        API_PREFIX + "/{path:path}",
        methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        include_in_schema=False,
    )
    def api_not_found(path: str):
        raise NotFoundError("API endpoint not found")

    if app_settings.static_dir and os.path.isdir(app_settings.static_dir):
        app.mount("/", StaticFiles(directory=app_settings.static_dir, html=True), name="static")
    else:
        @app.get("/", tags=["root"])
        def root():
            return {"name": app_settings.app_name, "env": app_settings.app_env}

    @app.on_event("startup")
    def on_startup():
        if app_settings.auto_create_schema:
            init_db(engine)
        logger.info("%s started (env=%s)", app_settings.app_name, app_settings.app_env)

    @app.on_event("shutdown")
    def on_shutdown():
        engine.dispose()

    return app

app = create_app()

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from schooldir.config import Settings, get_settings
from schooldir.database import create_db_engine, create_session_factory, init_schema
from schooldir.errors import InvalidInputError, StorageError
from schooldir.routers import health as health_router, schools as schools_router
from schooldir.utils.logging import configure_logging

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).with_name("templates")))


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Пул соединений живёт столько же, сколько процесс
    settings: Settings = app.state.settings
    configure_logging(settings)
    engine = create_db_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    if settings.create_schema:
        init_schema(engine)
    logger.info("Connected to %s", engine.url.render_as_string(hide_password=True))
    try:
        yield
    finally:
        engine.dispose()
        logger.info("Database pool closed")


def _field_errors(exc: RequestValidationError) -> list:
    errors = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        errors.append({
            "field": str(loc[-1]) if loc else None,
            "msg": err.get("msg"),
            "location": loc[0] if loc else None,
        })
    return errors


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="School Directory", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"errors": _field_errors(exc)})

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return JSONResponse(status_code=400, content={"errors": [exc.as_dict()]})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        return JSONResponse(status_code=500, content={"error": "Database error"})

    app.include_router(schools_router.router)
    # тот же API под /api, как в serverless-развёртывании
    app.include_router(schools_router.router, prefix="/api", include_in_schema=False)
    app.include_router(health_router.router)

    @app.get("/", response_class=HTMLResponse)
    def root(request: Request):
        return templates.TemplateResponse(request, "index.html", {"api_base": ""})

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("schooldir.main:app", host=settings.host, port=settings.port)

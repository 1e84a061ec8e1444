"""FastAPI application."""

import argparse
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from configs import Settings, settings as default_settings
from src.controllers.ai_controllers import ai_router
from src.controllers.customers_controllers import customer_router
from src.controllers.dashboard_controllers import dashboard_router
from src.controllers.expenses_controllers import expense_router
from src.controllers.meetings_controllers import meeting_router
from src.controllers.notes_controllers import note_router
from src.controllers.proposals_controllers import proposal_router
from src.controllers.settings_controllers import settings_router
from src.controllers.tasks_controllers import task_router
from src.controllers.webhooks.twilio_controllers import twilio_router
from src.controllers.whatsapp_controllers import whatsapp_router
from src.repositories.crm import models  # noqa: F401
from src.repositories.crm.database import Base, SessionLocal, engine
from src.services.errors import CRMError
from src.services.settings.runtime_config import ConfigManager

from startup import create_seed_data

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def create_app(settings: Optional[Settings] = None, init_db: bool = True) -> FastAPI:
    """
    Build the API.

    Args:
        settings (Optional[Settings]): Environment settings, defaults to ``configs.settings``.
        init_db (bool): Create tables, seed defaults and load stored settings on startup.
    """
    settings = settings or default_settings
    config_manager = ConfigManager(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        if init_db:
            logger.info("Creating database tables...")
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created successfully!")

            db = SessionLocal()
            try:
                create_seed_data(db)
                config_manager.reload(db)
            finally:
                db.close()
        yield

    logger.info("Starting FastAPI application...")
    app = FastAPI(
        title="Agency CRM API",
        root_path=settings.ROOT_PATH_BACKEND,
        description="Customer, interaction and sales pipeline endpoints of the agency CRM",
        lifespan=lifespan,
    )
    app.state.config_manager = config_manager

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CRMError)
    async def crm_error_handler(_request: Request, exc: CRMError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    app.include_router(customer_router)
    app.include_router(note_router)
    app.include_router(task_router)
    app.include_router(meeting_router)
    app.include_router(proposal_router)
    app.include_router(expense_router)
    app.include_router(whatsapp_router)
    app.include_router(twilio_router)
    app.include_router(ai_router)
    app.include_router(settings_router)
    app.include_router(dashboard_router)

    @app.get("/", response_description="Api healthcheck")  # type: ignore[misc]
    async def index() -> Dict[str, str]:
        """Define a route for handling HTTP GET requests to the root URL ("/")."""
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser()
    parser.add_argument("--host", required=True, help="Application host.")
    parser.add_argument("--port", required=True, help="Application port.")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development purposes.",
    )
    args = parser.parse_args()

    uvicorn.run("app:app", host=args.host, port=int(args.port), reload=args.reload)

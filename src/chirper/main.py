import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from .api.dependencies import templates
from .api.responses import APIException, describe_error, error_response, get_http_status
from .auth import AuthMiddleware
from .config import ChirperConfig, configure_logging, get_config
from .core.container import Container
from .core.errors import ChirperError, StoreError
from .routers import register_routers

logger = logging.getLogger(__name__)


def create_app(config: Optional[ChirperConfig] = None) -> FastAPI:
    """Build the Chirper application for a configuration."""
    config = config or get_config()
    configure_logging(config)

    app = FastAPI(title="Chirper", debug=config.debug)
    app.state.container = Container(config)

    # Add authentication middleware
    app.add_middleware(AuthMiddleware)

    register_routers(app)

    @app.exception_handler(ChirperError)
    async def chirper_error_handler(request: Request, exc: ChirperError):
        described = describe_error(exc)
        status_code = get_http_status(described["code"])
        if isinstance(exc, StoreError):
            logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")

        if request.url.path.startswith("/api/"):
            return JSONResponse(
                status_code=status_code,
                content=error_response(
                    code=described["code"],
                    message=described["message"],
                    field_errors=described.get("field_errors"),
                ),
            )
        return templates.TemplateResponse(
            request,
            "error.html",
            {"status_code": status_code, "message": described["message"]},
            status_code=status_code,
        )

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        return exc.to_response()

    @app.get("/")
    def root():
        return RedirectResponse(url="/chirps", status_code=302)

    @app.get("/health")
    def health():
        return {"status": "ok", "backend": config.database_backend}

    logger.info(f"Chirper app created (environment: {config.environment})")
    return app


# Load environment variables from .env file
load_dotenv()

app = create_app()
